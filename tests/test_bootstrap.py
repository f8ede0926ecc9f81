from dataclasses import replace

import pytest

from newmachine import bootstrap as bootstrap_mod
from newmachine.bootstrap import bootstrap, run_setup
from newmachine.cli import parse_args
from newmachine.config import Settings, TOOLS
from newmachine.releases import Release
from newmachine.tools.base import InstallState
from newmachine.tools.neovim import NeovimInstaller

from conftest import FakeManager, FakeReleases


@pytest.fixture
def debian_root(tmp_path):
    root = tmp_path / "root"
    (root / "etc").mkdir(parents=True)
    (root / "etc" / "debian_version").write_text("12.5\n")
    return root


@pytest.fixture(autouse=True)
def offline_binaries(monkeypatch):
    monkeypatch.setattr("newmachine.tools.base.shutil.which", lambda _: None)
    monkeypatch.setattr(NeovimInstaller, "manual_paths", lambda self: [])


def test_unsupported_platform_exits_before_any_side_effect(settings, tmp_path) -> None:
    with pytest.raises(SystemExit) as exc:
        run_setup(settings, root=tmp_path / "empty", manager=FakeManager())

    assert exc.value.code == 3
    assert not settings.backup_dir.exists()


def test_full_run_backs_up_and_checks_tools(settings, debian_root) -> None:
    (settings.home / ".bashrc").write_text("old\n")
    manager = FakeManager({"neovim": "0.9.0", "starship": "1.16.0"})
    releases = FakeReleases(Release("v0.10.2", []))

    outcomes = bootstrap(
        replace(settings, tools=("starship", "neovim")),
        root=debian_root,
        releases=releases,
        manager=manager,
    )

    assert [o.tool for o in outcomes] == ["starship", "neovim"]
    assert all(o.state is InstallState.UP_TO_DATE for o in outcomes)
    assert (settings.backup_dir / ".bashrc").read_text() == "old\n"
    assert releases.fetched == []


def test_skip_backup(settings, debian_root) -> None:
    manager = FakeManager({"neovim": "0.9.5"})

    bootstrap(
        replace(settings, tools=("neovim",), skip_backup=True),
        root=debian_root,
        releases=FakeReleases(Release("v0.10.2", [])),
        manager=manager,
    )

    assert not settings.backup_dir.exists()


def test_install_failure_exits_nonzero_and_stops(settings, debian_root) -> None:
    manager = FakeManager({"starship": "1.16.0"})
    releases = FakeReleases(Release("v0.10.2", []))

    with pytest.raises(SystemExit) as exc:
        run_setup(
            replace(settings, tools=("neovim", "starship"), skip_backup=True),
            root=debian_root,
            releases=releases,
            manager=manager,
        )

    assert exc.value.code == 4
    # starship never got queried
    assert manager.queried == ["neovim"]


def test_refresh_runs_index_update(settings, debian_root, monkeypatch) -> None:
    calls = []
    manager = FakeManager({"neovim": "0.9.0"})
    monkeypatch.setattr(manager, "update", lambda: calls.append("update") or True)

    bootstrap(
        replace(settings, tools=("neovim",), skip_backup=True, refresh_index=True),
        root=debian_root,
        manager=manager,
    )

    assert calls == ["update"]


def test_parse_args_defaults(tmp_path) -> None:
    settings = Settings.from_args(parse_args([]), home=tmp_path)

    assert settings.tools == TOOLS
    assert settings.backup_dir == tmp_path / "migration" / "dotfiles"
    assert settings.min_neovim_version == "0.9.0"
    assert settings.dotfiles_dir is None
    assert not settings.skip_backup


def test_parse_args_overrides(tmp_path) -> None:
    args = parse_args([
        "--tools", "neovim", "bash",
        "--no-backup",
        "--min-neovim", "0.10.0",
        "--dotfiles-dir", str(tmp_path / "dots"),
        "--install-root", str(tmp_path / "opt"),
    ])
    settings = Settings.from_args(args, home=tmp_path)

    assert settings.tools == ("neovim", "bash")
    assert settings.skip_backup
    assert settings.min_neovim_version == "0.10.0"
    assert settings.dotfiles_dir == tmp_path / "dots"
    assert str(settings.install_root) == str(tmp_path / "opt")


def test_parse_args_rejects_unknown_tool() -> None:
    with pytest.raises(SystemExit) as exc:
        parse_args(["--tools", "emacs"])

    assert exc.value.code == 2
