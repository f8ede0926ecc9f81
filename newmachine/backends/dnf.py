# newmachine/backends/dnf.py

from newmachine.backends.base import PackageManager
from newmachine.utils.osdetect import DistroProfile

PROFILE = DistroProfile(
    package_manager_id="dnf",
    marker="/etc/fedora-release",
    update_command=("dnf", "makecache"),
    install_command=("dnf", "install", "-y", "{package}"),
    remove_command=("dnf", "remove", "-y", "{package}"),
    installed_version_query=("rpm", "-q", "--qf", "%{VERSION}", "{package}"),
)


class Dnf(PackageManager):
    profile = PROFILE
    priority = 30


manager = Dnf
