# newmachine/backends/base.py

import logging

from newmachine.utils.errors import QueryFailed
from newmachine.utils.osdetect import DistroProfile
from newmachine.utils.shell import as_root, run_cmd
from newmachine.utils.versions import extract_version

logger = logging.getLogger(__name__)


class PackageManager:
    """
    Common interface over a distribution package manager.

    Subclasses set ``profile`` and ``priority`` and may override
    ``parse_version`` when the query command prints more than the version.
    """

    profile: DistroProfile
    priority = 100

    def __init__(self, profile: DistroProfile | None = None, runner=run_cmd):
        if profile is not None:
            self.profile = profile
        self.runner = runner

    @property
    def name(self) -> str:
        return self.profile.package_manager_id

    def parse_version(self, stdout: str) -> str | None:
        return extract_version(stdout)

    def query_output(self, package: str) -> str:
        """
        Raw stdout of the installed-version query; QueryFailed when the
        manager exits non-zero or is missing altogether.
        """
        cmd = self.profile.render(self.profile.installed_version_query, package)
        result = self.runner(cmd)
        if not result.ok:
            raise QueryFailed(f"{self.name} query for {package} exited {result.returncode}")
        return result.stdout

    def query_version(self, package: str) -> str | None:
        """
        Installed version of ``package`` or None. Never raises.
        """
        try:
            return self.parse_version(self.query_output(package))
        except QueryFailed as e:
            logger.debug("%s", e)
            return None

    def update(self) -> bool:
        return self._privileged(list(self.profile.update_command))

    def install(self, package: str) -> bool:
        return self._privileged(self.profile.render(self.profile.install_command, package))

    def remove(self, package: str) -> bool:
        return self._privileged(self.profile.render(self.profile.remove_command, package))

    def _privileged(self, cmd: list[str]) -> bool:
        result = self.runner(as_root(cmd), capture=False)
        if not result.ok:
            logger.debug("%s failed with exit code %s", cmd[0], result.returncode)
        return result.ok
