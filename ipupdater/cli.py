import signal
import sys
from pathlib import Path

import click

# Use relative imports to avoid module loading conflicts
from . import config
from .agent import build_agent
from .config_loader import ConfigLoader
from .errors import ConfigDisabled, ConfigError, NetworkError
from .logging_config import setup_logging
from .network import NetworkDetector
from .storage import HistoryLog, StateStore


def signal_handler(signum, frame):
    """Handle interrupt signals gracefully."""
    signal_name = signal.Signals(signum).name
    click.echo(f"\n\nReceived {signal_name}. Exiting gracefully...")
    sys.exit(0)


# --- CLI Commands ---


class OrderedGroup(click.Group):
    """Custom Click group that preserves command order."""

    def list_commands(self, ctx):
        return list(self.commands.keys())


data_dir_option = click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Directory holding config.json, state.json and history.json "
    f"(default: ${config.DATA_DIR_ENV_VAR} or {config.DEFAULT_DATA_DIR}).",
)


@click.group(cls=OrderedGroup)
def cli():
    """
    IP Updater - email your Mac's private IP address when it changes.

    The agent is started by launchd on network changes, wake and login. Each
    run compares the current Wi-Fi address with the last one that was emailed
    and sends a notification when it differs.
    """
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


@cli.command()
@click.option("--debug", is_flag=True, help="Enable debug logging and echo the log to the terminal.")
@data_dir_option
def run(debug, data_dir):
    """
    Run the agent once, exactly as launchd does.

    \b
    Exit codes:
      0  finished (including disabled, offline, unchanged or failed send)
      1  the configuration is missing or invalid
    """
    settings = config.load_settings()
    setup_logging(
        debug=debug or settings["settings"]["debug"],
        console=debug,
        force_reinit=True,
    )

    agent = build_agent(data_dir=data_dir, settings=settings)
    try:
        result = agent.run()
    except ConfigError as e:
        if debug:
            click.echo(click.style(f"Invalid configuration: {e}", fg="red"), err=True)
        sys.exit(1)

    if debug:
        click.echo(f"Outcome: {result.outcome.value}")


@cli.command()
@data_dir_option
def check(data_dir):
    """
    Show what the agent would see, without sending or saving anything.
    """
    settings = config.load_settings()["settings"]
    loader = ConfigLoader(config.get_config_path(data_dir))

    click.echo(click.style("Configuration", bold=True))
    try:
        loaded = loader.read()
    except ConfigDisabled:
        click.echo(click.style("  Disabled", fg="yellow"))
    except ConfigError as e:
        click.echo(click.style(f"  Invalid: {e}", fg="red"))
    else:
        click.echo(f"  Version:    {loaded.version}")
        click.echo(f"  Recipients: {', '.join(loaded.recipients)}")
        click.echo(f"  Keychain:   {loaded.secret.service} / {loaded.secret.account}")
        if loaded.metadata.label:
            click.echo(f"  Label:      {loaded.metadata.label}")

    click.echo(click.style("Network", bold=True))
    detector = NetworkDetector(interface=settings["interface"])
    try:
        address = detector.detect_private_ipv4()
    except NetworkError as e:
        click.echo(click.style(f"  {e}", fg="yellow"))
        return

    click.echo(f"  {detector.interface}: {address}")
    previous = StateStore(config.get_state_path(data_dir)).read()
    if previous is None:
        click.echo("  No address notified yet; the next run will send a first-run email.")
    elif previous.address == address:
        click.echo("  Unchanged since the last notification.")
    else:
        click.echo(f"  Changed from {previous.address}; the next run will send an email.")


@cli.command()
@data_dir_option
def status(data_dir):
    """Show the last notified address and the most recent run."""
    state = StateStore(config.get_state_path(data_dir)).read()
    if state:
        click.echo(f"Last notified address: {state.address} (at {state.observed_at})")
    else:
        click.echo("Last notified address: none")

    entries = HistoryLog(config.get_history_path(data_dir)).read()
    if entries:
        click.echo(f"Last run: {_format_entry(entries[-1])}")
    else:
        click.echo("Last run: no history recorded")


@cli.command()
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(min=1),
    default=10,
    show_default=True,
    help="Number of entries to show.",
)
@data_dir_option
def history(limit, data_dir):
    """Show recent agent decisions, newest last."""
    entries = HistoryLog(config.get_history_path(data_dir)).read()
    if not entries:
        click.echo("No history recorded.")
        return

    for entry in entries[-limit:]:
        click.echo(_format_entry(entry))


def _format_entry(entry):
    sent = (
        click.style("sent", fg="green")
        if entry.notification_sent
        else click.style("failed", fg="red")
    )
    return f"{entry.timestamp}  {entry.address:<15}  {entry.reason.value:<14}  {sent}"


if __name__ == "__main__":
    cli()
