# newmachine/tools/starship.py

import logging
import tempfile
from pathlib import Path

from newmachine.releases import extract_archive
from newmachine.tools.base import ToolInstaller
from newmachine.utils.osdetect import get_arch
from newmachine.utils.versions import extract_version

logger = logging.getLogger(__name__)

REPO = "starship/starship"


class StarshipInstaller(ToolInstaller):
    """
    Prompt. Any installed version will do; the distro package is preferred
    and the static musl build from GitHub is the fallback.
    """

    name = "starship"
    package = "starship"
    binary = "starship"

    def manual_paths(self) -> list[Path]:
        return [Path(self.settings.install_root) / "bin" / "starship"]

    def install(self) -> str | None:
        if self.manager is not None and self.manager.install(self.package):
            logger.info("Installed starship from %s", self.manager.name)
            return self.manager.query_version(self.package) or self.binary_version()

        logger.info("Install starship from GitHub release")
        release = self.releases.latest(REPO)
        asset = release.find_asset(rf"starship-{get_arch()}-unknown-linux-musl\.tar\.gz")

        bindir = Path(self.settings.install_root) / "bin"
        with tempfile.TemporaryDirectory(prefix="newmachine-starship-") as tmp:
            archive = self.releases.download(asset, Path(tmp))
            extract_archive(archive, bindir)

        logger.info("Starship %s has been installed to %s", release.tag, bindir / "starship")
        return extract_version(release.tag) or release.tag
