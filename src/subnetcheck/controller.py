import ipaddress
from pathlib import Path

from rich.console import Console
from rich.table import Table

from subnetcheck.config import ConfigError, dump_config, load_networks
from subnetcheck.logger import log
from subnetcheck.registry import NetworkRegistry
from subnetcheck.models import AttachmentRequest, IPNetwork, Network, PerNetworkOptions
from subnetcheck.validate import validate_attachment_request, validate_subnets

console = Console()


class SubnetController:
    """Runs validation over network config files and reports the outcome."""

    def check(
        self,
        config_path: Path,
        used: list[IPNetwork] | None = None,
        output: Path | None = None,
    ) -> list[Network]:
        """Validate every network in a config file. Returns the normalized networks."""
        networks, config_used = load_networks(config_path)
        used_networks = list(used or []) + config_used
        registry = NetworkRegistry()

        for network in networks:
            log.debug("Validating network %s", network.name)
            validate_subnets(network, used_networks + registry.used_subnets())
            registry.add(network)
            console.print(f"[bold green]OK[/bold green] {network.name}")

        self._print_networks(registry.list_all())

        if output is not None:
            path = dump_config(networks, config_used, output)
            console.print(f"[bold]Wrote normalized config:[/bold] {path}")
        return networks

    def attach(
        self,
        config_path: Path,
        namespace_path: str,
        container_id: str,
        networks: list[str],
        static_ips: list[str] | None = None,
    ) -> AttachmentRequest:
        """Validate a container attachment against the networks in a config file."""
        defined, used = load_networks(config_path)
        registry = NetworkRegistry()
        for network in defined:
            validate_subnets(network, used + registry.used_subnets())
            registry.add(network)

        request = build_request(container_id, networks, static_ips or [])
        validate_attachment_request(registry.network, namespace_path, request)

        table = Table(title=f"Attachment - {container_id}")
        table.add_column("Network", style="cyan")
        table.add_column("Interface", style="green")
        table.add_column("Static IPs")
        for name, opts in request.networks.items():
            ips = ", ".join(str(ip) for ip in opts.static_ips) or "-"
            table.add_row(name, opts.interface_name, ips)
        console.print(table)
        console.print("[bold green]Attachment request is valid.[/bold green]")
        return request

    def _print_networks(self, networks: list[Network]) -> None:
        table = Table(title="Networks")
        table.add_column("Network", style="cyan")
        table.add_column("Driver")
        table.add_column("Subnet", style="green")
        table.add_column("Gateway")
        table.add_column("Lease Range")

        for network in networks:
            name = network.name
            if network.internal:
                name += " [dim](internal)[/dim]"
            if not network.subnets:
                table.add_row(name, network.driver, "-", "-", "-")
            for s in network.subnets:
                lease = "-"
                if s.lease_range is not None:
                    start = s.lease_range.start_ip if s.lease_range.start_ip is not None else "*"
                    end = s.lease_range.end_ip if s.lease_range.end_ip is not None else "*"
                    lease = f"{start} - {end}"
                gateway = str(s.gateway) if s.gateway is not None else "-"
                table.add_row(name, network.driver, str(s.subnet), gateway, lease)

        console.print(table)


def build_request(
    container_id: str, networks: list[str], static_ips: list[str]
) -> AttachmentRequest:
    """Build an attachment request from ``NAME[:IFACE]`` and ``NAME=IP`` strings."""
    request = AttachmentRequest(container_id=container_id)
    for i, spec in enumerate(networks):
        name, _, iface = spec.partition(":")
        if not name:
            raise ConfigError(f"Invalid network '{spec}' (expected NAME[:IFACE])")
        request.networks[name] = PerNetworkOptions(
            interface_name=iface if iface else f"eth{i}"
        )

    for spec in static_ips:
        if "=" not in spec:
            raise ConfigError(f"Invalid static ip '{spec}' (expected NAME=IP)")
        name, value = spec.split("=", 1)
        if name not in request.networks:
            raise ConfigError(f"Static ip '{value}' given for unknown network '{name}'")
        try:
            ip = ipaddress.ip_address(value)
        except ValueError:
            raise ConfigError(f"Invalid IP address '{value}'") from None
        request.networks[name].static_ips.append(ip)
    return request
