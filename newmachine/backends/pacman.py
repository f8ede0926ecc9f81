# newmachine/backends/pacman.py

from newmachine.backends.base import PackageManager
from newmachine.utils.osdetect import DistroProfile
from newmachine.utils.versions import extract_version

PROFILE = DistroProfile(
    package_manager_id="pacman",
    marker="/etc/arch-release",
    update_command=("pacman", "-Sy"),
    install_command=("pacman", "-S", "--needed", "--noconfirm", "{package}"),
    remove_command=("pacman", "-Rns", "--noconfirm", "{package}"),
    installed_version_query=("pacman", "-Qi", "{package}"),
)


class Pacman(PackageManager):
    profile = PROFILE
    priority = 20

    def parse_version(self, stdout: str) -> str | None:
        """
        Pick the "Version : 0.9.5-1" field out of `pacman -Qi`.
        """
        for line in stdout.splitlines():
            if line.startswith("Version"):
                return extract_version(line.split(":", 1)[1])
        return None


manager = Pacman
