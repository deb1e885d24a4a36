from mini_client.core.checksum import CHECKSUM_HEADER, array_to_obj, compute_checksum
from mini_client.core.config import Config, build_options, merge_options
from mini_client.core.descriptor import OperationDescriptor, ServiceDescriptor
from mini_client.core.enricher import api, get_param_names, is_api, publish
from mini_client.core.errors import (
    ClientError,
    ConfigurationError,
    OperationError,
    ProtocolError,
    RemoteIncompatibilityError,
    ValidationError,
)
from mini_client.core.groups import Group, extract_groups
from mini_client.core.registry import Namespace, Registry

__all__ = [
    "CHECKSUM_HEADER",
    "ClientError",
    "Config",
    "ConfigurationError",
    "Group",
    "Namespace",
    "OperationDescriptor",
    "OperationError",
    "ProtocolError",
    "Registry",
    "RemoteIncompatibilityError",
    "ServiceDescriptor",
    "ValidationError",
    "api",
    "array_to_obj",
    "build_options",
    "compute_checksum",
    "extract_groups",
    "get_param_names",
    "is_api",
    "merge_options",
    "publish",
]
