import pytest

from newmachine.backends.registry import manager_for, ordered_profiles
from newmachine.backends.pacman import Pacman
from newmachine.utils import osdetect
from newmachine.utils.errors import UnsupportedPlatform
from newmachine.utils.osdetect import detect_profile, get_arch, get_distro


def _touch(root, rel):
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")


def test_profiles_are_ordered_by_priority() -> None:
    assert [p.package_manager_id for p in ordered_profiles()] == ["apt", "pacman", "dnf", "zypper"]


def test_detect_profile_picks_arch(tmp_path) -> None:
    _touch(tmp_path, "etc/arch-release")

    profile = detect_profile(tmp_path)

    assert profile.package_manager_id == "pacman"
    assert isinstance(manager_for(profile), Pacman)


def test_detect_profile_first_marker_wins(tmp_path) -> None:
    _touch(tmp_path, "etc/arch-release")
    _touch(tmp_path, "etc/debian_version")

    assert detect_profile(tmp_path).package_manager_id == "apt"


def test_detect_profile_without_marker_is_unsupported(tmp_path) -> None:
    with pytest.raises(UnsupportedPlatform) as exc:
        detect_profile(tmp_path)

    assert exc.value.exit_code == 3
    assert "/etc/debian_version" in str(exc.value)


def test_get_distro_reads_pretty_name(tmp_path) -> None:
    (tmp_path / "etc").mkdir()
    (tmp_path / "etc/os-release").write_text(
        '# comment\nID=debian\nPRETTY_NAME="Debian GNU/Linux 12 (bookworm)"\n'
    )

    assert get_distro(tmp_path) == "Debian GNU/Linux 12 (bookworm)"


def test_get_distro_without_os_release(tmp_path) -> None:
    assert get_distro(tmp_path) == "unknown"


@pytest.mark.parametrize("machine, expected", [("AMD64", "x86_64"), ("arm64", "aarch64"), ("riscv64", "riscv64")])
def test_get_arch_normalises_machine(monkeypatch, machine, expected) -> None:
    monkeypatch.setattr(osdetect.platform, "machine", lambda: machine)

    assert get_arch() == expected


def test_detect_profile_rejects_non_linux(tmp_path, monkeypatch) -> None:
    _touch(tmp_path, "etc/debian_version")
    monkeypatch.setattr(osdetect.platform, "system", lambda: "Darwin")

    with pytest.raises(UnsupportedPlatform) as exc:
        detect_profile(tmp_path)

    assert "macos" in str(exc.value)


def test_get_os_passes_other_systems_through(monkeypatch) -> None:
    monkeypatch.setattr(osdetect.platform, "system", lambda: "FreeBSD")

    assert osdetect.get_os() == "freebsd"
