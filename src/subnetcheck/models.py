import ipaddress
from dataclasses import dataclass, field

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address
IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network
# Anything a subnet may be written as before it is normalized.
SubnetLike = str | IPNetwork | ipaddress.IPv4Interface | ipaddress.IPv6Interface


@dataclass
class LeaseRange:
    """Bounds of the dynamic assignment range. Either side may be unset."""

    start_ip: IPAddress | None = None
    end_ip: IPAddress | None = None


@dataclass
class Subnet:
    subnet: SubnetLike | None
    gateway: IPAddress | None = None
    lease_range: LeaseRange | None = None


@dataclass
class Network:
    name: str
    subnets: list[Subnet] = field(default_factory=list)
    internal: bool = False
    ipv6_enabled: bool = False
    driver: str = "bridge"
    network_interface: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    options: dict[str, str] = field(default_factory=dict)


@dataclass
class PerNetworkOptions:
    interface_name: str
    static_ips: list[IPAddress] = field(default_factory=list)


@dataclass
class AttachmentRequest:
    """A container's requested networks, keyed by network name."""

    container_id: str
    networks: dict[str, PerNetworkOptions] = field(default_factory=dict)
    container_name: str = ""
