import functools
import ipaddress
from pathlib import Path

import click
from rich.console import Console

from subnetcheck import __version__
from subnetcheck.config import ConfigError
from subnetcheck.controller import SubnetController
from subnetcheck.logger import setup_logger
from subnetcheck.network import NetworkError

console = Console()
controller = SubnetController()


def handle_errors(fn):
    """Decorator to catch and display validation and config errors."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (ConfigError, NetworkError) as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise SystemExit(1)

    return wrapper


def _parse_cidrs(ctx, param, values):
    used = []
    for value in values:
        try:
            used.append(ipaddress.ip_network(value, strict=False))
        except ValueError:
            raise click.BadParameter(f"'{value}' is not a valid CIDR")
    return used


@click.group()
@click.version_option(version=__version__, prog_name="subnetcheck")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Subnetcheck - validate container network subnets and attachments."""
    setup_logger(verbose)


@cli.command()
@click.argument("config", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--used", multiple=True, callback=_parse_cidrs,
    help="CIDR already in use on the host (repeatable)",
)
@click.option(
    "-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None,
    help="Write the normalized config to this file",
)
@handle_errors
def check(config, used, output):
    """Validate the networks defined in CONFIG."""
    controller.check(config, used=used, output=output)


@cli.command()
@click.argument("config", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--netns", default="", help="Path of the container network namespace")
@click.option("--container-id", default="", help="Container ID")
@click.option("-n", "--network", "networks", multiple=True, help="Network to join as NAME[:IFACE]")
@click.option("--ip", "static_ips", multiple=True, help="Static IP as NAME=IP (repeatable)")
@handle_errors
def attach(config, netns, container_id, networks, static_ips):
    """Validate a container attachment against the networks in CONFIG."""
    controller.attach(
        config, netns, container_id, list(networks), static_ips=list(static_ips)
    )
