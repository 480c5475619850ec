from subnetcheck.network import NetworkNotFoundError, normalize_cidr
from subnetcheck.models import IPNetwork, Network


class NetworkRegistry:
    """In-memory set of network definitions, looked up by name."""

    def __init__(self, networks: list[Network] | None = None):
        self._networks: dict[str, Network] = {}
        for network in (networks or []):
            self.add(network)

    def add(self, network: Network) -> None:
        self._networks[network.name] = network

    def network(self, name: str) -> Network:
        """Return the network called ``name``."""
        try:
            return self._networks[name]
        except KeyError:
            raise NetworkNotFoundError(f"unable to find network with name {name}") from None

    def list_all(self) -> list[Network]:
        return list(self._networks.values())

    def used_subnets(self) -> list[IPNetwork]:
        """Return subnets taken by registered networks."""
        subnets = []
        for network in self._networks.values():
            for s in network.subnets:
                if s.subnet is not None:
                    subnets.append(normalize_cidr(s.subnet))
        return subnets
