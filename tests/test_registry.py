import ipaddress

import pytest

from subnetcheck.network import NetworkNotFoundError
from subnetcheck.registry import NetworkRegistry
from subnetcheck.models import Network, Subnet


def test_lookup_by_name(net1):
    registry = NetworkRegistry([net1])
    assert registry.network("net1") is net1


def test_lookup_missing():
    with pytest.raises(NetworkNotFoundError, match="other"):
        NetworkRegistry().network("other")


def test_used_subnets_normalizes_all_networks(net1):
    other = Network(name="other", subnets=[Subnet(subnet="172.20.0.5/16")])
    registry = NetworkRegistry([net1, other])
    assert registry.used_subnets() == [
        ipaddress.ip_network("10.0.0.0/24"),
        ipaddress.ip_network("172.20.0.0/16"),
    ]
