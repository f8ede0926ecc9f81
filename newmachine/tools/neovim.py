# newmachine/tools/neovim.py

import logging
import tempfile
from pathlib import Path

from newmachine.releases import extract_archive
from newmachine.tools.base import ToolInstaller
from newmachine.utils.osdetect import get_arch
from newmachine.utils.versions import extract_version

logger = logging.getLogger(__name__)

REPO = "neovim/neovim"
# release assets call aarch64 "arm64"
ASSET_ARCH = {"aarch64": "arm64"}


class NeovimInstaller(ToolInstaller):
    name = "neovim"
    package = "neovim"
    binary = "nvim"

    def __init__(self, manager, settings, releases=None, **kwargs):
        super().__init__(manager, settings, releases, **kwargs)
        self.minimum_version = settings.min_neovim_version

    def manual_paths(self) -> list[Path]:
        roots = [Path("/usr"), Path(self.settings.install_root)]
        paths = []
        for root in dict.fromkeys(roots):
            paths += [root / "bin" / "nvim", root / "lib" / "nvim", root / "share" / "nvim"]
        return paths

    def install(self) -> str:
        release = self.releases.latest(REPO)
        arch = get_arch()
        asset = release.find_asset(rf"nvim-linux-{ASSET_ARCH.get(arch, arch)}\.tar\.gz")

        root = Path(self.settings.install_root)
        with tempfile.TemporaryDirectory(prefix="newmachine-nvim-") as tmp:
            archive = self.releases.download(asset, Path(tmp))
            extract_archive(archive, root, strip_components=1)

        logger.info("Neovim %s has been installed to %s", release.tag, root / "bin" / "nvim")
        return extract_version(release.tag) or release.tag
