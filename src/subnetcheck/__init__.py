"""Validation and normalization of container network subnets and attachments."""

__version__ = "0.1.0"

from subnetcheck.network import (
    EmptyContainerIDError,
    EmptyInterfaceNameError,
    EmptyNamespacePathError,
    GatewayOutOfRangeError,
    InvalidSubnetError,
    LeaseEndOutOfRangeError,
    LeaseRangeError,
    LeaseStartOutOfRangeError,
    NetworkError,
    NetworkNotFoundError,
    NilSubnetError,
    NoNetworksSpecifiedError,
    StaticIPNotInSubnetError,
    SubnetConflictError,
    SubnetTooSmallError,
)
from subnetcheck.registry import NetworkRegistry
from subnetcheck.models import (
    AttachmentRequest,
    LeaseRange,
    Network,
    PerNetworkOptions,
    Subnet,
)
from subnetcheck.validate import (
    validate_attachment_request,
    validate_per_network_options,
    validate_subnet,
    validate_subnets,
)
