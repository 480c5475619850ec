"""Subnet and attachment validation run before a network or container
attachment is handed to the backend.

Validated records are only written back once every check for them has
passed, so a failed call leaves its input unchanged.
"""
from typing import Callable

from subnetcheck.logger import log
from subnetcheck.network import (
    EmptyContainerIDError,
    EmptyInterfaceNameError,
    EmptyNamespacePathError,
    GatewayOutOfRangeError,
    InvalidSubnetError,
    LeaseEndOutOfRangeError,
    LeaseStartOutOfRangeError,
    NilSubnetError,
    NoNetworksSpecifiedError,
    StaticIPNotInSubnetError,
    SubnetConflictError,
    find_conflict,
    first_ip_in_subnet,
    is_ipv6,
    normalize_cidr,
    normalize_ip,
    subnet_contains,
)
from subnetcheck.models import (
    AttachmentRequest,
    IPAddress,
    IPNetwork,
    LeaseRange,
    Network,
    PerNetworkOptions,
    Subnet,
)

NetworkLookup = Callable[[str], Network]


def resolve_gateway(
    net: IPNetwork, gateway: IPAddress | None, auto_assign: bool
) -> IPAddress | None:
    """Check an explicit gateway, or pick the first address when ``auto_assign``."""
    if gateway is not None:
        if not subnet_contains(net, gateway):
            raise GatewayOutOfRangeError(f"gateway {gateway} not in subnet {net}")
        return normalize_ip(gateway)
    if auto_assign:
        gateway = first_ip_in_subnet(net)
        log.debug("Assigned default gateway %s to subnet %s", gateway, net)
        return gateway
    return None


def validate_lease_range(net: IPNetwork, lease_range: LeaseRange | None) -> LeaseRange | None:
    if lease_range is None:
        return None
    start, end = lease_range.start_ip, lease_range.end_ip
    if start is not None:
        if not subnet_contains(net, start):
            raise LeaseStartOutOfRangeError(
                f"lease range start ip {start} not in subnet {net}"
            )
        start = normalize_ip(start)
    if end is not None:
        if not subnet_contains(net, end):
            raise LeaseEndOutOfRangeError(
                f"lease range end ip {end} not in subnet {net}"
            )
        end = normalize_ip(end)
    return LeaseRange(start_ip=start, end_ip=end)


def _validated(subnet: Subnet | None, add_gateway: bool, used_networks: list[IPNetwork]) -> Subnet:
    if subnet is None:
        raise NilSubnetError("subnet is nil")
    if subnet.subnet is None:
        raise NilSubnetError("subnet ip is nil")

    net = normalize_cidr(subnet.subnet)
    if str(net) != str(subnet.subnet):
        log.debug("Normalized subnet %s to %s", subnet.subnet, net)

    conflict = find_conflict(net, used_networks)
    if conflict is not None:
        raise SubnetConflictError(net, conflict)

    return Subnet(
        subnet=net,
        gateway=resolve_gateway(net, subnet.gateway, add_gateway),
        lease_range=validate_lease_range(net, subnet.lease_range),
    )


def _apply(target: Subnet, validated: Subnet) -> None:
    target.subnet = validated.subnet
    target.gateway = validated.gateway
    target.lease_range = validated.lease_range


def validate_subnet(
    subnet: Subnet, add_gateway: bool, used_networks: list[IPNetwork]
) -> Subnet:
    """Validate one subnet and normalize it in place.

    The subnet is rewritten to its network address, checked against
    ``used_networks``, and its gateway and lease range are checked to lie
    inside it. Without a gateway, ``add_gateway`` assigns the first address
    of the subnet. Returns the same record.
    """
    validated = _validated(subnet, add_gateway, used_networks)
    _apply(subnet, validated)
    return subnet


def validate_subnets(network: Network, used_networks: list[IPNetwork]) -> Network:
    """Validate every subnet of ``network`` and set ``ipv6_enabled``.

    Internal networks never get a default gateway. The first failing subnet
    aborts the call and nothing on the network is changed.
    """
    validated = [
        _validated(s, not network.internal, used_networks) for s in network.subnets
    ]
    for target, result in zip(network.subnets, validated):
        _apply(target, result)
        if is_ipv6(result.subnet):
            network.ipv6_enabled = True
    return network


def validate_attachment_request(
    lookup: NetworkLookup, namespace_path: str, request: AttachmentRequest
) -> None:
    """Check a container attachment against the networks it names.

    ``lookup`` resolves a network name and its errors are passed through.
    """
    if not namespace_path:
        raise EmptyNamespacePathError("namespace path is empty")
    if not request.container_id:
        raise EmptyContainerIDError("container ID is empty")
    if not request.networks:
        raise NoNetworksSpecifiedError("must specify at least one network")
    for name, opts in request.networks.items():
        network = lookup(name)
        validate_per_network_options(network, opts)


def validate_per_network_options(network: Network, opts: PerNetworkOptions) -> None:
    """Check that all requested static ips are in a subnet of ``network``."""
    if not opts.interface_name:
        raise EmptyInterfaceNameError(
            f"interface name on network {network.name} is empty"
        )
    nets = _usable_subnets(network)
    for ip in opts.static_ips:
        if not any(subnet_contains(net, ip) for net in nets):
            raise StaticIPNotInSubnetError(
                f"requested static ip {ip} not in any subnet on network {network.name}"
            )


def _usable_subnets(network: Network) -> list[IPNetwork]:
    """Return the parseable subnets of ``network`` in stored order."""
    nets = []
    for s in network.subnets:
        if s.subnet is None:
            continue
        try:
            nets.append(normalize_cidr(s.subnet))
        except InvalidSubnetError:
            log.debug("Skipping invalid subnet %s on network %s", s.subnet, network.name)
    return nets
