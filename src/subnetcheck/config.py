import ipaddress
from pathlib import Path

import yaml

from subnetcheck.models import IPAddress, IPNetwork, LeaseRange, Network, Subnet


class ConfigError(Exception):
    pass


def load_config(path: Path) -> dict:
    """Load and parse a network definition YAML file."""
    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(config, dict):
        raise ConfigError(f"Invalid config file: {path}")
    return config


def validate_config(config: dict) -> None:
    """Validate required fields in a network config."""
    networks = config.get("networks")
    if not isinstance(networks, list) or not networks:
        raise ConfigError("Config must define at least one network")
    seen = set()
    for i, net in enumerate(networks):
        if not isinstance(net, dict) or "name" not in net:
            raise ConfigError(f"Network {i} missing required field: 'name'")
        if net["name"] in seen:
            raise ConfigError(f"Duplicate network name: '{net['name']}'")
        seen.add(net["name"])
        if not isinstance(net.get("subnets", []), list):
            raise ConfigError(f"Network '{net['name']}' field 'subnets' must be a list")
    if not isinstance(config.get("used_subnets", []), list):
        raise ConfigError("Field 'used_subnets' must be a list")


def parse_address(value, where: str) -> IPAddress | None:
    if value is None:
        return None
    try:
        return ipaddress.ip_address(str(value))
    except ValueError:
        raise ConfigError(f"Invalid IP address '{value}' in {where}") from None


def parse_subnet(entry: dict, where: str) -> Subnet:
    if not isinstance(entry, dict):
        raise ConfigError(f"Subnet entry in {where} must be a mapping")
    raw = entry.get("subnet")
    subnet = None
    if raw is not None:
        # Host bits are kept so validation can canonicalize them; values that
        # do not parse or lack a prefix are passed through for validation to reject.
        subnet = str(raw)
        if "/" in subnet:
            try:
                subnet = ipaddress.ip_interface(subnet)
            except ValueError:
                pass

    lease_range = None
    lease = entry.get("lease_range")
    if lease is not None:
        if not isinstance(lease, dict):
            raise ConfigError(f"Field 'lease_range' in {where} must be a mapping")
        lease_range = LeaseRange(
            start_ip=parse_address(lease.get("start_ip"), f"{where} lease_range"),
            end_ip=parse_address(lease.get("end_ip"), f"{where} lease_range"),
        )

    return Subnet(
        subnet=subnet,
        gateway=parse_address(entry.get("gateway"), f"{where} gateway"),
        lease_range=lease_range,
    )


def parse_network(net: dict) -> Network:
    name = net["name"]
    return Network(
        name=name,
        subnets=[
            parse_subnet(s, f"network '{name}' subnet {i}")
            for i, s in enumerate(net.get("subnets", []))
        ],
        internal=bool(net.get("internal", False)),
        driver=net.get("driver", "bridge"),
        network_interface=net.get("network_interface", ""),
        labels=dict(net.get("labels") or {}),
        options=dict(net.get("options") or {}),
    )


def parse_used_subnets(values: list) -> list[IPNetwork]:
    used = []
    for value in values:
        try:
            used.append(ipaddress.ip_network(str(value), strict=False))
        except ValueError:
            raise ConfigError(f"Invalid used subnet '{value}'") from None
    return used


def load_networks(path: Path) -> tuple[list[Network], list[IPNetwork]]:
    """Load a config file and return its networks and pre-used subnets."""
    config = load_config(path)
    validate_config(config)
    networks = [parse_network(net) for net in config["networks"]]
    return networks, parse_used_subnets(config.get("used_subnets", []))


def _subnet_to_dict(s: Subnet) -> dict:
    out = {"subnet": str(s.subnet)}
    if s.gateway is not None:
        out["gateway"] = str(s.gateway)
    if s.lease_range is not None:
        lease = {}
        if s.lease_range.start_ip is not None:
            lease["start_ip"] = str(s.lease_range.start_ip)
        if s.lease_range.end_ip is not None:
            lease["end_ip"] = str(s.lease_range.end_ip)
        out["lease_range"] = lease
    return out


def network_to_dict(network: Network) -> dict:
    out = {
        "name": network.name,
        "driver": network.driver,
        "internal": network.internal,
        "ipv6_enabled": network.ipv6_enabled,
    }
    if network.network_interface:
        out["network_interface"] = network.network_interface
    if network.labels:
        out["labels"] = network.labels
    if network.options:
        out["options"] = network.options
    out["subnets"] = [_subnet_to_dict(s) for s in network.subnets]
    return out


def dump_config(networks: list[Network], used_subnets: list[IPNetwork], path: Path) -> Path:
    """Write validated networks back out as YAML."""
    config = {}
    if used_subnets:
        config["used_subnets"] = [str(n) for n in used_subnets]
    config["networks"] = [network_to_dict(n) for n in networks]
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    return path
