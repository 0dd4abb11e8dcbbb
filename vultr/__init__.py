"""Client library for the Vultr v1 REST API."""

__version__ = "1.0.0"

from vultr.exceptions import (
    VultrError,
    TransportError,
    ClassifiedApiError,
    UnclassifiedApiError,
    MalformedResponseError,
)
from vultr.types import (
    Verb,
    ErrorKind,
    RequestDescriptor,
    RequestError,
    Result,
    STATUS_CLASSIFICATION,
)
from vultr.config import ClientConfig
from vultr.engine import RequestEngine, classify_status, parse_body
from vultr.catalog import CATALOG, ENDPOINTS, Endpoint, build_path, get_endpoint
from vultr.client import VultrClient, get_default_client, set_token


def __getattr__(name):
    # vultr.get_account_info(callback) runs on the process-wide client
    if name in CATALOG:
        return getattr(get_default_client(), name)
    raise AttributeError(f"module 'vultr' has no attribute '{name}'")
