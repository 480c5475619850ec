import ipaddress

from subnetcheck.models import IPAddress, IPNetwork, SubnetLike


class NetworkError(Exception):
    pass


class NilSubnetError(NetworkError):
    pass


class InvalidSubnetError(NetworkError):
    pass


class SubnetConflictError(NetworkError):
    def __init__(self, subnet: IPNetwork, conflict: IPNetwork):
        self.subnet = subnet
        self.conflict = conflict
        super().__init__(
            f"subnet {subnet} is already used on the host or by another config "
            f"(overlaps {conflict})"
        )


class GatewayOutOfRangeError(NetworkError):
    pass


class SubnetTooSmallError(NetworkError):
    pass


class LeaseRangeError(NetworkError):
    pass


class LeaseStartOutOfRangeError(LeaseRangeError):
    pass


class LeaseEndOutOfRangeError(LeaseRangeError):
    pass


class EmptyNamespacePathError(NetworkError):
    pass


class EmptyContainerIDError(NetworkError):
    pass


class NoNetworksSpecifiedError(NetworkError):
    pass


class NetworkNotFoundError(NetworkError):
    pass


class EmptyInterfaceNameError(NetworkError):
    pass


class StaticIPNotInSubnetError(NetworkError):
    pass


def normalize_cidr(value: SubnetLike | None) -> IPNetwork:
    """Parse a subnet and return the network address form of its prefix.

    Host bits are dropped, so ``10.0.0.7/24`` becomes ``10.0.0.0/24``.
    """
    if value is None:
        raise NilSubnetError("subnet ip is nil")
    if isinstance(value, str) and "/" not in value:
        raise InvalidSubnetError(f"subnet invalid: {value} has no prefix length")
    try:
        return ipaddress.ip_network(str(value), strict=False)
    except ValueError as e:
        raise InvalidSubnetError(f"subnet invalid: {e}") from e


def normalize_ip(ip: IPAddress | str) -> IPAddress:
    """Return ``ip`` as an address object, unwrapping IPv4-mapped IPv6 addresses."""
    addr = ipaddress.ip_address(ip) if isinstance(ip, str) else ip
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


def subnet_contains(net: IPNetwork, ip: IPAddress | str) -> bool:
    addr = normalize_ip(ip)
    return addr.version == net.version and addr in net


def is_ipv6(net: IPNetwork) -> bool:
    return net.version == 6


def networks_intersect(a: IPNetwork, b: IPNetwork) -> bool:
    """Two ranges intersect when either base address lies inside the other."""
    if a.version != b.version:
        return False
    return a.network_address in b or b.network_address in a


def find_conflict(net: IPNetwork, used: list[IPNetwork]) -> IPNetwork | None:
    """Return the first used range that overlaps ``net``."""
    for other in used:
        if networks_intersect(net, other):
            return other
    return None


def network_intersects_with_networks(net: IPNetwork, used: list[IPNetwork]) -> bool:
    return find_conflict(net, used) is not None


def first_ip_in_subnet(net: IPNetwork) -> IPAddress:
    """Return the first usable address (network address + 1) of a subnet."""
    if net.prefixlen >= net.max_prefixlen - 1:
        raise SubnetTooSmallError(
            f"subnet {net} has no usable address for a gateway"
        )
    return net.network_address + 1
