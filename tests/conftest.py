import io
import tarfile
from pathlib import Path

import pytest

from newmachine.config import Settings
from newmachine.releases import Release, ReleaseAsset
from newmachine.utils.shell import CmdResult


class FakeRunner:
    """Records argv lists; answers by argv prefix (sudo ignored)."""

    def __init__(self, responses=None):
        self.calls: list[list[str]] = []
        self.responses = responses or {}

    def __call__(self, argv, capture: bool = True) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        key = argv[1:] if argv and argv[0] == "sudo" else argv
        for prefix, (code, out) in self.responses.items():
            if tuple(key[: len(prefix)]) == prefix:
                return CmdResult(argv, code, out, "")
        return CmdResult(argv, 0, "", "")


class FakeManager:
    name = "fake"

    def __init__(self, versions=None, remove_ok=True, install_ok=False):
        self.versions = dict(versions or {})
        self.remove_ok = remove_ok
        self.install_ok = install_ok
        self.queried: list[str] = []
        self.removed: list[str] = []
        self.installed: list[str] = []

    def query_version(self, package):
        self.queried.append(package)
        return self.versions.get(package)

    def remove(self, package):
        self.removed.append(package)
        return self.remove_ok

    def install(self, package):
        self.installed.append(package)
        if self.install_ok:
            self.versions[package] = "1.0.0"
        return self.install_ok

    def update(self):
        return True


class FakeReleases:
    def __init__(self, release: Release, members: dict[str, bytes] | None = None):
        self.release = release
        self.members = members or {}
        self.fetched: list = []
        self.downloaded: list[ReleaseAsset] = []

    def latest(self, repo):
        self.fetched.append(repo)
        return self.release

    def by_tag(self, repo, tag):
        self.fetched.append((repo, tag))
        return self.release

    def download(self, asset, directory):
        self.downloaded.append(asset)
        path = Path(directory) / asset.name
        make_tarball(path, self.members)
        return path


def make_tarball(path: Path, members: dict[str, bytes]) -> Path:
    mode = "w:xz" if path.name.endswith(".xz") else "w:gz"
    with tarfile.open(path, mode) as tar:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(data))
    return path


@pytest.fixture
def settings(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    return Settings(
        home=home,
        backup_dir=home / "migration" / "dotfiles",
        install_root=tmp_path / "local",
    )


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def no_which():
    return lambda _name: None
