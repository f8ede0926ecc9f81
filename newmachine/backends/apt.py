# newmachine/backends/apt.py

from newmachine.backends.base import PackageManager
from newmachine.utils.osdetect import DistroProfile

PROFILE = DistroProfile(
    package_manager_id="apt",
    marker="/etc/debian_version",
    update_command=("apt-get", "update"),
    install_command=("apt-get", "--yes", "satisfy", "{package}"),
    remove_command=("apt-get", "autoremove", "--yes", "{package}"),
    installed_version_query=("dpkg-query", "-W", "-f=${Version}", "{package}"),
)


class Apt(PackageManager):
    profile = PROFILE
    priority = 10

    def parse_version(self, stdout: str) -> str | None:
        # dpkg-query prints an empty version for removed-but-not-purged packages
        if not stdout.strip():
            return None
        return super().parse_version(stdout)


manager = Apt
