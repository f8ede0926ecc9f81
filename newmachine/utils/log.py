import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Route all 'newmachine.*' loggers through rich on the shared console.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )
    logger = logging.getLogger("newmachine")
    logger.setLevel(level)
    # urllib3 chatters on every request at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return logger
