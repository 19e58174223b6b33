import signal
import sys
import threading

import click
import toml

from . import config
from .display import format_interface, format_snapshot, format_state
from .logging_config import setup_logging
from .models import PathSnapshot, SupportResult
from .network import describe_interfaces, get_default_gateway
from .path import PathObserver, get_selection_policy, read_current_path, select_active_interface
from .state import PathStateStore


def signal_handler(signum, frame):
    """Handle interrupt signals gracefully."""
    signal_name = signal.Signals(signum).name
    click.echo(f"\n\nReceived {signal_name}. Exiting gracefully...")
    sys.exit(0)


signal.signal(signal.SIGINT, signal_handler)  # Ctrl+C
signal.signal(signal.SIGTERM, signal_handler)  # Termination signal


class OrderedGroup(click.Group):
    """Custom Click group that preserves command order."""

    def list_commands(self, ctx):
        return list(self.commands.keys())


def _load_settings(monitor=None):
    settings = config.get_settings(config.load_config())
    if monitor:
        settings["monitor"] = monitor
    return settings


@click.group(cls=OrderedGroup)
def cli():
    """
    PathWatcher - Watch the network path your traffic takes.

    PathWatcher reports the current network path: whether it is usable,
    which interface carries traffic, whether IPv4, IPv6 and DNS are
    available and whether the link is expensive or constrained. It can
    keep watching and print a fresh report on every network change.
    """
    pass


@cli.command()
@click.option("--debug", is_flag=True, help="Enable verbose debug logging.")
@click.option(
    "--count",
    type=click.IntRange(min=0),
    default=0,
    help="Exit after this many updates (0 keeps watching).",
)
@click.option(
    "--monitor",
    type=click.Choice(config.MONITOR_CHOICES),
    default=None,
    help="Override the configured path monitor.",
)
def watch(debug, count, monitor):
    """
    Watch the network path and print every change.

    \b
    The first report is printed as soon as monitoring starts; after that
    one report is printed per network change. Stop with Ctrl+C.
    """
    settings = _load_settings(monitor)
    setup_logging(debug=debug or settings["debug"], force_reinit=True)

    observer = PathObserver(settings=settings)
    store = PathStateStore()
    done = threading.Event()

    def render(state):
        click.echo("\n".join(format_state(state)))
        click.echo()
        if count and state.update_count >= count:
            done.set()

    store.add_listener(render)

    if store.attach(observer) is SupportResult.UNSUPPORTED:
        click.echo(
            click.style("Network path monitoring is not supported on this platform.", fg="red"),
            err=True,
        )
        sys.exit(1)

    try:
        while not done.wait(0.5):
            pass
    finally:
        observer.stop()


@cli.command()
@click.option("--debug", is_flag=True, help="Enable verbose debug logging.")
def status(debug):
    """Print a single report of the current network path."""
    settings = _load_settings()
    setup_logging(debug=debug or settings["debug"], force_reinit=True)

    path = read_current_path(settings)
    active = select_active_interface(
        path, policy=get_selection_policy(settings["selection_policy"])
    )
    snapshot = PathSnapshot.from_path(path, active)

    click.echo(click.style("Network Path State", bold=True))
    click.echo("\n".join(format_snapshot(snapshot)))


@cli.command()
def interfaces():
    """List every network interface with its flags and addresses."""
    described = describe_interfaces()
    if not described:
        click.echo(click.style("No network interfaces found.", fg="yellow"))
        return

    for entry in described:
        click.echo("\n".join(format_interface(entry)))


@cli.command()
def gateway():
    """Show the default gateway and the interface it is reached through."""
    route = get_default_gateway()
    if route is None:
        click.echo(click.style("No default gateway found.", fg="yellow"))
        return

    if route.gateway:
        click.echo(f"Default gateway: {route.gateway} via {route.interface}")
    else:
        click.echo(f"Default gateway interface: {route.interface}")


@cli.command(name="config")
def show_config():
    """Show the configuration file location and effective settings."""
    click.echo(f"Configuration file: {config.get_config_path()}")
    click.echo(f"Log file: {config.LOG_FILE}")
    click.echo()
    click.echo(toml.dumps({"settings": _load_settings()}))


if __name__ == "__main__":
    cli()
