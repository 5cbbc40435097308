"""Chain access: event queries and outcome submission."""

from .abi import FULFILL_FUNCTION, ORACLE_ABI, REQUEST_EVENT
from .client import ChainClient, FulfillmentCall, Web3ChainClient, request_from_log
from .deployment import DeploymentConfig, load_deployment_config
from .submitter import Submitter

__all__ = [
    "ChainClient",
    "DeploymentConfig",
    "FULFILL_FUNCTION",
    "FulfillmentCall",
    "ORACLE_ABI",
    "REQUEST_EVENT",
    "Submitter",
    "Web3ChainClient",
    "load_deployment_config",
    "request_from_log",
]
