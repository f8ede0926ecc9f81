# newmachine/releases.py

import logging
import os
import re
import tarfile
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

import requests

from newmachine.utils.errors import AssetNotFound, DownloadOrExtractFailed
from newmachine.utils.shell import as_root, run_cmd

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com/repos/"
HEADERS = {
    "Accept": "application/vnd.github+json",
    "User-Agent": "newmachine",
}
CHUNK = 1 << 16


@dataclass(frozen=True)
class ReleaseAsset:
    name: str
    url: str


@dataclass(frozen=True)
class Release:
    tag: str
    assets: list[ReleaseAsset] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> "Release":
        tag = data.get("tag_name")
        if not tag:
            raise DownloadOrExtractFailed("tag_name not found in release document")
        assets = [
            ReleaseAsset(a["name"], a["browser_download_url"])
            for a in data.get("assets", [])
            if "name" in a and "browser_download_url" in a
        ]
        return cls(tag=str(tag), assets=assets)

    def find_asset(self, pattern: str) -> ReleaseAsset:
        """
        First asset whose full name matches the regular expression.
        """
        rx = re.compile(pattern)
        for asset in self.assets:
            if rx.fullmatch(asset.name):
                return asset
        raise AssetNotFound(f"No asset matching {pattern!r} in release {self.tag}")


class GitHubReleases:
    """
    Thin client over the GitHub releases API.
    """

    def __init__(self, session: requests.Session | None = None):
        self.session = session or requests.Session()
        self.session.headers.update(HEADERS)

    def _get_json(self, url: str) -> dict:
        try:
            r = self.session.get(url)
            r.raise_for_status()
            return r.json()
        except (requests.RequestException, ValueError) as e:
            raise DownloadOrExtractFailed(f"Could not fetch {url}: {e}") from e

    def latest(self, repo: str) -> Release:
        return Release.from_json(self._get_json(f"{GITHUB_API}{repo}/releases/latest"))

    def by_tag(self, repo: str, tag: str) -> Release:
        return Release.from_json(self._get_json(f"{GITHUB_API}{repo}/releases/tags/{tag}"))

    def download(self, asset: ReleaseAsset, directory: Path) -> Path:
        target = Path(directory) / asset.name
        logger.info("Downloading %s", asset.url)
        try:
            with self.session.get(asset.url, stream=True) as r:
                r.raise_for_status()
                with open(target, "wb") as fh:
                    for chunk in r.iter_content(chunk_size=CHUNK):
                        fh.write(chunk)
        except (requests.RequestException, OSError) as e:
            raise DownloadOrExtractFailed(f"Download of {asset.name} failed: {e}") from e
        return target


def _stripped_members(tar: tarfile.TarFile, strip_components: int):
    for member in tar.getmembers():
        parts = PurePosixPath(member.name).parts[strip_components:]
        if not parts:
            continue
        if ".." in parts or member.name.startswith("/"):
            raise DownloadOrExtractFailed(f"Refusing unsafe archive member {member.name!r}")
        member.name = str(PurePosixPath(*parts))
        if member.islnk():
            link = PurePosixPath(member.linkname).parts[strip_components:]
            member.linkname = str(PurePosixPath(*link)) if link else member.linkname
        yield member


def extract_archive(archive: Path, target: Path, strip_components: int = 0) -> None:
    """
    Unpack a .tar.gz / .tar.xz into ``target`` dropping leading path parts,
    like `tar --strip-components`. Falls back to `sudo tar` when ``target``
    is not writable by us.
    """
    target = Path(target)
    if not target.exists():
        try:
            target.mkdir(parents=True)
        except OSError:
            result = run_cmd(as_root(["mkdir", "-p", str(target)]), capture=False)
            if not result.ok:
                raise DownloadOrExtractFailed(f"mkdir -p {target} exited {result.returncode}")

    if not os.access(target, os.W_OK):
        cmd = as_root([
            "tar", "-xf", str(archive), "-C", str(target),
            f"--strip-components={strip_components}",
        ])
        result = run_cmd(cmd, capture=False)
        if not result.ok:
            raise DownloadOrExtractFailed(f"tar exited {result.returncode} extracting {archive}")
        return

    # extraction filters only exist from 3.10.12 / 3.11.4 on
    kwargs = {"filter": "data"} if hasattr(tarfile, "data_filter") else {}
    try:
        with tarfile.open(archive, "r:*") as tar:
            members = list(_stripped_members(tar, strip_components))
            tar.extractall(target, members=members, **kwargs)
    except (tarfile.TarError, OSError) as e:
        raise DownloadOrExtractFailed(f"Extracting {archive} failed: {e}") from e
