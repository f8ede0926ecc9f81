# newmachine/tools/bash.py

import logging
import re
import shutil
import tempfile
from pathlib import Path

from newmachine.releases import extract_archive
from newmachine.tools.base import ToolInstaller
from newmachine.utils.errors import DownloadOrExtractFailed, InstallCommandFailed
from newmachine.utils.versions import extract_version

logger = logging.getLogger(__name__)

REPO = "akinomyoga/ble.sh"
NIGHTLY = "nightly"
# (source inside the dotfiles directory, destination under $HOME)
RC_FILES = (
    ("bash/bashrc", ".bashrc"),
    ("aliases", ".bash_aliases"),
)
RE_BLE_VERSION = re.compile(
    r"^\s*(?:_ble_init_version|BLE_VERSION)=['\"]?(\d[^\s'\";]*)", re.M
)


class BashInstaller(ToolInstaller):
    """
    Shell setup: the user's rc files plus the ble.sh line editor, which is
    not packaged by distributions and lives under ~/.local/share/blesh.
    """

    name = "bash"

    @property
    def share_dir(self) -> Path:
        return Path(self.settings.home) / ".local" / "share"

    def blesh_path(self) -> Path:
        return self.share_dir / "blesh" / "ble.sh"

    def configure(self) -> None:
        src = self.settings.dotfiles_dir
        if src is None:
            logger.debug("No dotfiles directory given, leaving bash rc files alone")
            return
        home = Path(self.settings.home)
        for rel, dest in RC_FILES:
            source = Path(src) / rel
            if not source.is_file():
                logger.warning("%s not found, keeping current ~/%s", source, dest)
                continue
            try:
                shutil.copy2(source, home / dest)
            except OSError as e:
                logger.warning("Copying %s to ~/%s failed: %s", source, dest, e)
            else:
                logger.info("Copied %s to %s", source, home / dest)

    def binary_version(self) -> str | None:
        """
        Read the version assignment out of the installed ble.sh. Sourcing it
        is no good here: ble.sh refuses to load in a non-interactive shell.
        """
        path = self.blesh_path()
        if not path.is_file():
            return None
        try:
            text = path.read_text(errors="replace")
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            return None
        m = RE_BLE_VERSION.search(text)
        if not m:
            return None
        return extract_version(m.group(1))

    def install(self) -> str | None:
        release = self.releases.by_tag(REPO, NIGHTLY)
        asset = release.find_asset(r"ble-nightly.*\.tar\.xz")

        with tempfile.TemporaryDirectory(prefix="newmachine-blesh-") as tmp:
            archive = self.releases.download(asset, Path(tmp))
            workdir = Path(tmp) / "src"
            extract_archive(archive, workdir)
            script = next(workdir.glob("*/ble.sh"), None)
            if script is None:
                raise DownloadOrExtractFailed(f"ble.sh not found in {asset.name}")
            result = self.runner(
                ["bash", str(script), "--install", str(self.share_dir)], capture=False
            )
            if not result.ok:
                raise InstallCommandFailed(f"ble.sh --install exited {result.returncode}")

        logger.info("Done setting up Bash")
        return self.binary_version() or release.tag
