"""CLI entry point for trash-expiry."""

import logging
import shlex
import shutil
import subprocess
import sys
from pathlib import Path

import click

from . import __version__
from .config import load_settings
from .domain.errors import UserUnknown
from .domain.models import ExpiryReport
from .expiry import capture_context, run_expiry

logger = logging.getLogger(__name__)

UNIT_NAME = "trash-expiry"
SYSTEMD_USER_DIR = Path("~/.config/systemd/user").expanduser()

SERVICE_TEMPLATE = """\
[Unit]
Description=Remove expired items from the trash

[Service]
Type=oneshot
ExecStart={command}
"""

TIMER_TEMPLATE = """\
[Unit]
Description=Remove expired items from the trash daily

[Timer]
OnCalendar=daily
Persistent=true
RandomizedDelaySec=1h

[Install]
WantedBy=timers.target
"""


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def resolve_command() -> list[str]:
    """Command line that runs one expiry pass, for the service unit."""
    exe = shutil.which(UNIT_NAME)
    if exe:
        return [exe]
    return [sys.executable, "-m", "trash_expiry"]


def render_service_unit(command: list[str]) -> str:
    return SERVICE_TEMPLATE.format(command=shlex.join(command))


def render_timer_unit() -> str:
    return TIMER_TEMPLATE


def format_summary(report: ExpiryReport, dry_run: bool = False) -> str:
    verb = "Would erase" if dry_run else "Erased"
    return (
        f"{verb} {len(report.deleted)} of {report.scanned} items "
        f"in {report.directories} trash directories; "
        f"{len(report.warned)} expiring soon"
    )


def systemctl(*args: str, check: bool = True) -> None:
    subprocess.run(["systemctl", "--user", *args], check=check)


@click.group(invoke_without_command=True)
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.option("-n", "--dry-run", is_flag=True, help="Report what would be erased")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None, dry_run: bool) -> None:
    """Trash Expiry - remove old items from trash."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None
    ctx.obj["dry_run"] = dry_run

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Expire old trash items once (the default)."""
    settings, problems = load_settings(ctx.obj["config_path"])
    dry_run = ctx.obj["dry_run"]

    try:
        context = capture_context()
    except UserUnknown as e:
        click.echo(f"Error: cannot determine user: {e}", err=True)
        sys.exit(2)

    report = run_expiry(settings, context, config_problems=problems, dry_run=dry_run)
    click.echo(format_summary(report, dry_run=dry_run))

    if not report.success:
        click.echo(f"{len(report.errors)} errors:", err=True)
        for error in report.errors:
            click.echo(f"  {error.kind}: {error}", err=True)
        sys.exit(1)


@cli.command()
def install() -> None:
    """Install systemd user timer."""
    service_path = SYSTEMD_USER_DIR / f"{UNIT_NAME}.service"
    timer_path = SYSTEMD_USER_DIR / f"{UNIT_NAME}.timer"

    SYSTEMD_USER_DIR.mkdir(parents=True, exist_ok=True)

    service_path.write_text(render_service_unit(resolve_command()))
    timer_path.write_text(render_timer_unit())
    click.echo(f"Installed: {service_path}")
    click.echo(f"Installed: {timer_path}")

    # Enable timer
    systemctl("daemon-reload")
    systemctl("enable", "--now", f"{UNIT_NAME}.timer")
    click.echo("Timer enabled")


@cli.command()
def uninstall() -> None:
    """Remove systemd user timer."""
    service_path = SYSTEMD_USER_DIR / f"{UNIT_NAME}.service"
    timer_path = SYSTEMD_USER_DIR / f"{UNIT_NAME}.timer"

    if not timer_path.exists() and not service_path.exists():
        click.echo("Timer not installed")
        return

    # Disable timer
    systemctl("disable", "--now", f"{UNIT_NAME}.timer", check=False)
    click.echo("Timer disabled")

    for path in (timer_path, service_path):
        if path.exists():
            path.unlink()
            click.echo(f"Removed: {path}")

    systemctl("daemon-reload", check=False)


if __name__ == "__main__":
    cli()
