# newmachine/backends/zypper.py

from newmachine.backends.base import PackageManager
from newmachine.utils.osdetect import DistroProfile

PROFILE = DistroProfile(
    package_manager_id="zypper",
    marker="/etc/SUSE-brand",
    update_command=("zypper", "--non-interactive", "refresh"),
    install_command=("zypper", "--non-interactive", "install", "{package}"),
    remove_command=("zypper", "--non-interactive", "remove", "{package}"),
    installed_version_query=("rpm", "-q", "--qf", "%{VERSION}", "{package}"),
)


class Zypper(PackageManager):
    profile = PROFILE
    priority = 40


manager = Zypper
