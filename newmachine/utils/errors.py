import functools
import logging
import sys

from newmachine.utils.log import console

logger = logging.getLogger("newmachine")


class SetupError(Exception):
    """Base class for everything the bootstrap reports to the operator."""

    exit_code = 1


class UnsupportedPlatform(SetupError):
    exit_code = 3


class QueryFailed(SetupError):
    """The package manager could not answer; treated as 'not installed'."""


class RemovalFailed(SetupError):
    """Removing an old installation failed; installation proceeds anyway."""


class InstallError(SetupError):
    exit_code = 4


class AssetNotFound(InstallError):
    pass


class DownloadOrExtractFailed(InstallError):
    pass


class InstallCommandFailed(InstallError):
    pass


def handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except KeyboardInterrupt:
            console.print("[yellow]Interrupted[/yellow]")
            sys.exit(130)
        except SetupError as e:
            logger.error("%s ▶ %s", func.__name__, e)
            console.print(f"[bold red]❌ {e}[/bold red]")
            sys.exit(e.exit_code)
        except Exception as e:
            logger.exception("%s ▶ %s", func.__name__, e)
            console.print(f"[bold red][!] {func.__name__} failed:[/] {e}")
            sys.exit(1)

    return wrapper
