# newmachine/bootstrap.py

import logging

from rich.panel import Panel
from rich.table import Table

from newmachine.backends.registry import manager_for
from newmachine.backup import BackupReport, BackupStatus, backup_dotfiles
from newmachine.config import Settings
from newmachine.releases import GitHubReleases
from newmachine.tools import INSTALLERS
from newmachine.tools.base import InstallOutcome, InstallState
from newmachine.utils.errors import handle_errors
from newmachine.utils.log import console
from newmachine.utils.osdetect import detect_profile, get_distro

logger = logging.getLogger("newmachine")

STATUS_STYLE = {
    BackupStatus.COPIED: "green",
    BackupStatus.SKIPPED_MISSING: "yellow",
    BackupStatus.FAILED: "red",
}


def _print_backup(report: BackupReport):
    table = Table(title=f"[cyan]Dotfile backup → {report.destination}[/cyan]")
    table.add_column("Source", style="white")
    table.add_column("Result")
    for item in report.items:
        style = STATUS_STYLE[item.status]
        detail = f" ({item.error})" if item.error else ""
        table.add_row(str(item.source), f"[{style}]{item.status.value}{detail}[/{style}]")
    console.print(table)


def _print_outcome(outcome: InstallOutcome):
    before = outcome.before
    found = before.detected_version if before and before.detected_version else "-"
    if outcome.state is InstallState.UP_TO_DATE:
        console.print(Panel.fit(
            f"[bold green]✔️ {outcome.tool} {found} already satisfies the requirement[/bold green]",
            border_style="green",
        ))
    else:
        console.print(Panel.fit(
            "\n".join([
                f"[bold]Tool[/bold]: {outcome.tool}",
                f"[bold]Found[/bold]: {found} ({before.source.value if before else '-'})",
                f"[bold]Installed[/bold]: {outcome.version or '-'}",
                f"[bold]Steps[/bold]: {' → '.join(s.value for s in outcome.history)}",
            ]),
            title="[green]Installed[/green]",
            border_style="green",
        ))


def _print_summary(outcomes: list[InstallOutcome]):
    table = Table(title="Environment ready")
    table.add_column("Tool", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Result", style="magenta")
    for o in outcomes:
        table.add_row(o.tool, o.version or "-", o.state.value)
    console.print(table)


def bootstrap(settings: Settings, *, root="/", releases=None, manager=None) -> list[InstallOutcome]:
    """
    Detect, back up, then bring every configured tool up to date in order.

    The first unrecoverable install error propagates; nothing after it runs.
    """
    profile = detect_profile(root)
    console.print(
        f"[cyan]Detected package manager:[/cyan] {profile.package_manager_id} "
        f"[dim]({get_distro(root)})[/dim]"
    )

    if settings.skip_backup:
        logger.info("Skipping dotfile backup")
    else:
        _print_backup(backup_dotfiles(settings.home, settings.backup_dir, settings.dotfiles))

    if manager is None:
        manager = manager_for(profile)
    if settings.refresh_index and not manager.update():
        logger.warning("%s could not refresh its package index, continuing", manager.name)

    if releases is None:
        releases = GitHubReleases()

    outcomes = []
    for tool in settings.tools:
        installer = INSTALLERS[tool](manager, settings, releases)
        outcome = installer.run()
        _print_outcome(outcome)
        outcomes.append(outcome)

    _print_summary(outcomes)
    return outcomes


@handle_errors
def run_setup(settings: Settings, **kwargs):
    return bootstrap(settings, **kwargs)
