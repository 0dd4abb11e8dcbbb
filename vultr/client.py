"""
Vultr API client.

Every catalog row becomes a method. Methods return a Future that resolves
to a Result; pass a callback to be notified with (error, payload) instead.

Usage:
    with VultrClient(api_key) as client:
        result = client.get_account_info().result()
        records = client.get_records("example.com").result().unwrap()
        client.create_record(
            {"domain": "example.com", "name": "www", "type": "A", "data": "192.0.2.1"},
            callback=on_done,
        )
"""

import logging
import os
import threading
from concurrent.futures import Future
from typing import Any, Mapping

from vultr.catalog import ENDPOINTS, Endpoint, build_form, build_path, get_endpoint
from vultr.config import ClientConfig
from vultr.engine import Callback, RequestEngine
from vultr.types import RequestDescriptor, Result, Verb

logger = logging.getLogger(__name__)

# Process-wide client behind the module-level set_token()
_default_client: "VultrClient | None" = None
_default_lock = threading.Lock()


class VultrClient:
    """
    Handle owning one credential and one request engine.

    The credential is read once per call, when the request is built. A
    set_token() racing an in-flight request never changes what that
    request sends.
    """

    def __init__(
        self,
        api_key: str = "",
        config: ClientConfig | None = None,
        engine: RequestEngine | None = None,
    ):
        """
        Args:
            api_key: Credential sent with every request; empty is allowed
            config: Settings for a new engine
            engine: Existing engine; its config is the client's config

        Raises:
            ValueError: If both config and engine are given and differ
        """
        if engine is not None:
            if config is not None and config != engine.config:
                raise ValueError("pass either config or engine, not both")
            config = engine.config

        self.config = config or ClientConfig()
        self.engine = engine or RequestEngine(self.config)
        self._api_key = api_key
        self._token_lock = threading.Lock()

    @classmethod
    def from_env(cls) -> "VultrClient":
        """Client keyed by VULTR_API_KEY (empty if unset), config from VULTR_*."""
        return cls(os.getenv("VULTR_API_KEY", ""), ClientConfig.from_env())

    @property
    def api_key(self) -> str:
        with self._token_lock:
            return self._api_key

    def set_token(self, token: str) -> None:
        """Replace the credential for requests built from now on."""
        with self._token_lock:
            self._api_key = token
        logger.debug("API key updated")

    def request(
        self,
        verb: Verb | str,
        path: str,
        form: Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> "Future[Result]":
        """Send a request to an arbitrary path, bypassing the catalog."""
        descriptor = RequestDescriptor(
            verb=Verb(verb),
            path=path,
            form=build_form(form) if form is not None else None,
            api_key=self.api_key,
        )
        return self.engine.execute(descriptor, callback)

    def call(self, name: str, *args, **kwargs) -> "Future[Result]":
        """
        Invoke a catalog operation by name.

        Raises:
            AttributeError: Unknown operation
        """
        get_endpoint(name)
        return getattr(self, name)(*args, **kwargs)

    def _submit(
        self,
        endpoint: Endpoint,
        path: str,
        form: dict[str, str] | None,
        callback: Callback | None,
    ) -> "Future[Result]":
        descriptor = RequestDescriptor(
            verb=endpoint.verb,
            path=path,
            form=form,
            api_key=self.api_key,
        )
        return self.engine.execute(descriptor, callback)

    def close(self) -> None:
        self.engine.close()

    def __enter__(self) -> "VultrClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _make_operation(endpoint: Endpoint):
    """Build the client method for one catalog row."""

    if endpoint.verb is Verb.GET:

        def operation(self, *args, callback=None, **params):
            # Trailing callable is the callback: get_records("example.com", cb)
            if callback is None and args and callable(args[-1]):
                args, callback = args[:-1], args[-1]
            path = build_path(endpoint, args, params)
            return self._submit(endpoint, path, None, callback)

    else:

        def operation(self, form=None, /, callback=None, **fields):
            if callback is None and callable(form):
                form, callback = None, form
            return self._submit(endpoint, endpoint.path, build_form(form, fields), callback)

    operation.__name__ = endpoint.name
    operation.__qualname__ = f"VultrClient.{endpoint.name}"
    operation.__doc__ = _describe(endpoint)
    return operation


def _describe(endpoint: Endpoint) -> str:
    lines = [endpoint.doc, ""] if endpoint.doc else []
    lines.append(f"{endpoint.verb.value} {endpoint.path}")
    if endpoint.params:
        label = "Query" if endpoint.verb is Verb.GET else "Form"
        lines.append(f"{label} (required): {', '.join(endpoint.params)}")
    if endpoint.optional:
        lines.append(f"Query (optional): {', '.join(endpoint.optional)}")
    return "\n".join(lines)


for _endpoint in ENDPOINTS:
    setattr(VultrClient, _endpoint.name, _make_operation(_endpoint))
del _endpoint


def get_default_client() -> VultrClient:
    """Process-wide client used by the module-level helpers."""
    global _default_client
    with _default_lock:
        if _default_client is None:
            _default_client = VultrClient()
        return _default_client


def set_token(token: str) -> None:
    """Set the credential on the process-wide client. Last write wins."""
    get_default_client().set_token(token)
