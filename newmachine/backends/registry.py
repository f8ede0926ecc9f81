import pkgutil, importlib

import newmachine.backends as _pkg
from newmachine.utils.osdetect import DistroProfile

BACKENDS = {}
for _, modname, _ in pkgutil.iter_modules(_pkg.__path__):
    mod = importlib.import_module(f"newmachine.backends.{modname}")
    if hasattr(mod, "manager"):
        BACKENDS[mod.manager.profile.package_manager_id] = mod.manager


def ordered_profiles() -> list[DistroProfile]:
    """Profiles in detection priority order."""
    return [cls.profile for cls in sorted(BACKENDS.values(), key=lambda c: c.priority)]


def manager_for(profile: DistroProfile, **kwargs):
    try:
        cls = BACKENDS[profile.package_manager_id]
    except KeyError:
        raise ValueError(f"No backend for package manager {profile.package_manager_id!r}")
    return cls(profile, **kwargs)
