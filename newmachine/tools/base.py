# newmachine/tools/base.py

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from newmachine.utils.errors import InstallError, RemovalFailed
from newmachine.utils.shell import as_root, run_cmd
from newmachine.utils.versions import extract_version, version_lt

logger = logging.getLogger(__name__)


class InstallState(str, Enum):
    UNKNOWN = "unknown"
    QUERIED = "queried"
    UP_TO_DATE = "up-to-date"
    NEEDS_INSTALL = "needs-install"
    REMOVED_OLD = "removed-old"
    INSTALLED = "installed"
    FAILED = "failed"


class ToolSource(str, Enum):
    PACKAGE_MANAGER = "package-manager"
    MANUAL_BINARY = "manual-binary"
    NONE = "none"


@dataclass(frozen=True)
class InstalledToolState:
    tool_name: str
    detected_version: str | None = None
    source: ToolSource = ToolSource.NONE


@dataclass
class InstallOutcome:
    tool: str
    before: InstalledToolState | None = None
    history: list[InstallState] = field(default_factory=lambda: [InstallState.UNKNOWN])
    version: str | None = None
    error: str | None = None

    @property
    def state(self) -> InstallState:
        return self.history[-1]

    def advance(self, state: InstallState) -> None:
        logger.debug("%s: %s -> %s", self.tool, self.state.value, state.value)
        self.history.append(state)


class ToolInstaller:
    """
    Query, compare, remove-old, install.

    ``package`` is the distribution package name (None when the tool is never
    packaged), ``binary`` the executable looked up on PATH when the package
    manager knows nothing, ``minimum_version`` the floor below which an
    existing install is replaced. Without a minimum any detected version is
    good enough.
    """

    name = ""
    package: str | None = None
    binary: str | None = None
    minimum_version: str | None = None

    def __init__(self, manager, settings, releases=None, runner=run_cmd, which=None):
        self.manager = manager
        self.settings = settings
        self.releases = releases
        self.runner = runner
        self.which = which or shutil.which
        self.outcome = InstallOutcome(self.name)

    # -- hooks ---------------------------------------------------------

    def configure(self) -> None:
        """Run before the version check, whatever its result."""

    def manual_paths(self) -> list[Path]:
        return []

    def install(self) -> str | None:
        """Fetch and install the latest release; return the installed version."""
        raise NotImplementedError

    # -- state machine -------------------------------------------------

    def binary_version(self) -> str | None:
        if not self.binary:
            return None
        path = self.which(self.binary)
        if not path:
            return None
        logger.info("Found manual %s binary at %s", self.binary, path)
        result = self.runner([path, "--version"])
        if not result.ok:
            return None
        return extract_version(result.stdout)

    def query(self) -> InstalledToolState:
        if self.package and self.manager is not None:
            version = self.manager.query_version(self.package)
            if version:
                return InstalledToolState(self.name, version, ToolSource.PACKAGE_MANAGER)
        version = self.binary_version()
        if version:
            return InstalledToolState(self.name, version, ToolSource.MANUAL_BINARY)
        return InstalledToolState(self.name)

    def is_satisfied(self, state: InstalledToolState) -> bool:
        if state.detected_version is None:
            return False
        if self.minimum_version is None:
            return True
        return not version_lt(state.detected_version, self.minimum_version)

    def remove_old(self, state: InstalledToolState) -> bool:
        """
        Drop the distro package and any manual install paths. Failures are
        logged only. Returns True when something was removed.
        """
        removed = False
        if state.source is ToolSource.PACKAGE_MANAGER:
            logger.info(
                "Removing distro-managed %s (%s)...", self.package, state.detected_version
            )
            if self.manager.remove(self.package):
                removed = True
            else:
                logger.warning("%s", RemovalFailed(f"{self.manager.name} could not remove {self.package}"))

        stale = [p for p in self.manual_paths() if p.exists() or p.is_symlink()]
        if stale:
            logger.info("Clean up old %s files: %s", self.name, ", ".join(map(str, stale)))
            result = self.runner(as_root(["rm", "-rf", *map(str, stale)]), capture=False)
            if result.ok:
                removed = True
            else:
                logger.warning("%s", RemovalFailed(f"rm exited {result.returncode}"))
        return removed

    def run(self) -> InstallOutcome:
        outcome = self.outcome = InstallOutcome(self.name)
        self.configure()

        state = self.query()
        outcome.before = state
        outcome.advance(InstallState.QUERIED)
        if state.detected_version:
            logger.info("Installed %s version: %s (%s)", self.name, state.detected_version, state.source.value)
        else:
            logger.info("%s is not installed.", self.name)

        if self.is_satisfied(state):
            outcome.version = state.detected_version
            outcome.advance(InstallState.UP_TO_DATE)
            floor = f" ≥ {self.minimum_version}" if self.minimum_version else ""
            logger.info("Installed %s (%s)%s; no action needed.", self.name, state.detected_version, floor)
            return outcome

        outcome.advance(InstallState.NEEDS_INSTALL)
        if self.remove_old(state):
            outcome.advance(InstallState.REMOVED_OLD)

        logger.info("Installing/upgrading %s to the latest release...", self.name)
        try:
            outcome.version = self.install()
        except InstallError as e:
            outcome.error = str(e)
            outcome.advance(InstallState.FAILED)
            logger.error("Installing %s failed: %s", self.name, e)
            raise
        outcome.advance(InstallState.INSTALLED)
        return outcome
