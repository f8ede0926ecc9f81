import platform
import pathlib
from dataclasses import dataclass

from newmachine.utils.errors import UnsupportedPlatform

ARCH_ALIASES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


@dataclass(frozen=True)
class DistroProfile:
    """
    Command templates of one package manager. Every template is an argv
    tuple; the token "{package}" is replaced with the package name.
    """

    package_manager_id: str
    marker: str
    update_command: tuple[str, ...]
    install_command: tuple[str, ...]
    remove_command: tuple[str, ...]
    installed_version_query: tuple[str, ...]

    def render(self, template: tuple[str, ...], package: str) -> list[str]:
        return [part.replace("{package}", package) for part in template]


def get_os():
    system = platform.system().lower()
    if system.startswith("darwin"):
        return "macos"
    if system.startswith("windows"):
        return "windows"
    return system


def get_arch():
    machine = platform.machine().lower()
    return ARCH_ALIASES.get(machine, machine)


def get_distro(root="/"):
    """
    PRETTY_NAME from os-release, for display only.
    """
    data = {}
    path = pathlib.Path(root) / "etc/os-release"
    if not path.exists():
        return "unknown"
    for line in path.read_text().splitlines():
        if "=" not in line or line.startswith("#"):
            continue
        k, v = line.split("=", 1)
        data[k] = v.strip().strip('"')
    return data.get("PRETTY_NAME") or data.get("ID", "unknown")


def detect_profile(root="/", profiles=None) -> DistroProfile:
    """
    Return the profile whose marker file exists first, in priority order.
    """
    os_name = get_os()
    if os_name != "linux":
        raise UnsupportedPlatform(f"Unsupported operating system: {os_name}")

    if profiles is None:
        from newmachine.backends.registry import ordered_profiles

        profiles = ordered_profiles()

    base = pathlib.Path(root)
    for profile in profiles:
        if (base / profile.marker.lstrip("/")).exists():
            return profile

    markers = ", ".join(p.marker for p in profiles)
    raise UnsupportedPlatform(f"Unsupported Linux distribution (none of {markers} found)")
