"""
Request engine for the Vultr v1 API.

Every catalog operation funnels through here. One call in, one terminal
outcome out:

    engine = RequestEngine(ClientConfig())
    future = engine.execute(RequestDescriptor(verb=Verb.GET, path="/v1/account/info", api_key=key))
    result = future.result()
    if result.ok:
        print(result.value)

No retries, no rate limiting, no pagination. A 503 (rate limited) or 500
is reported to the caller like any other failure.
"""

import json
import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Any, Callable

import requests

from vultr.config import ClientConfig
from vultr.types import (
    STATUS_CLASSIFICATION,
    ErrorKind,
    RequestDescriptor,
    RequestError,
    Result,
    Verb,
)

logger = logging.getLogger(__name__)

# Receives (error, payload) on success as (None, value), on failure as (error, raw_body)
Callback = Callable[[RequestError | None, Any], None]


def classify_status(status_code: int, body: str | None = None) -> RequestError | None:
    """
    Map an HTTP status code to a failure, or None when the body should be parsed.

    Args:
        status_code: Response status
        body: Raw response text, kept on the error for diagnostics

    Returns:
        RequestError for documented codes and any other non-2xx, None for 2xx.
    """
    kind = STATUS_CLASSIFICATION.get(status_code)
    if kind is not None:
        return RequestError(
            kind=kind,
            message=kind.description,
            status_code=status_code,
            body=body,
        )

    if 200 <= status_code < 300:
        return None

    return RequestError(
        kind=ErrorKind.UNCLASSIFIED,
        message=f"Unexpected HTTP status {status_code}",
        status_code=status_code,
        body=body,
    )


def parse_body(body: str | None, status_code: int | None = None) -> Result:
    """Decode a success body. Empty is None, not an error."""
    if body is None or not body.strip():
        return Result.success(None)

    try:
        return Result.success(json.loads(body))
    except json.JSONDecodeError as e:
        return Result.failure(
            RequestError(
                kind=ErrorKind.MALFORMED_RESPONSE,
                message=f"{ErrorKind.MALFORMED_RESPONSE.description} ({e.msg})",
                status_code=status_code,
                body=body,
                cause=e,
            )
        )


class RequestEngine:
    """
    Performs requests and classifies their outcome.

    `send` blocks; `execute` runs `send` on a worker thread and returns a
    Future immediately. The engine holds no credential of its own, it sends
    whatever the descriptor captured.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: requests.Session | None = None,
    ):
        self.config = config or ClientConfig()
        self._session = session or requests.Session()
        self._executor: ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()

    def url_for(self, path: str) -> str:
        """Base origin plus path. Query strings are already part of path."""
        return f"{self.config.base_url}{path}"

    def _headers(self, descriptor: RequestDescriptor) -> dict[str, str]:
        return {
            self.config.api_key_header: descriptor.api_key,
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
        }

    def send(self, descriptor: RequestDescriptor) -> Result:
        """
        Perform one request and return its terminal outcome.

        Never raises for network or API failures; those come back as a
        failed Result. Anything that breaks before a response arrives
        (including header encoding inside the transport) is a transport
        failure.
        """
        url = self.url_for(descriptor.path)
        kwargs: dict[str, Any] = {
            "headers": self._headers(descriptor),
            "timeout": self.config.timeout_seconds,
        }
        if descriptor.verb is Verb.POST:
            kwargs["data"] = descriptor.form or {}

        logger.debug(f"{descriptor.verb.value} {descriptor.path}")

        try:
            response = self._session.request(descriptor.verb.value, url, **kwargs)
        except (requests.exceptions.RequestException, ConnectionError) as e:
            logger.warning(f"{descriptor.verb.value} {descriptor.path} failed: {e}")
            return Result.failure(_transport_error(e))
        except Exception as e:
            logger.warning(
                f"{descriptor.verb.value} {descriptor.path} failed before a response: "
                f"{type(e).__name__}: {e}"
            )
            return Result.failure(_transport_error(e))

        body = response.text
        logger.debug(f"{descriptor.verb.value} {descriptor.path} -> {response.status_code}")

        error = classify_status(response.status_code, body)
        if error is not None:
            logger.warning(
                f"{descriptor.verb.value} {descriptor.path} -> "
                f"{response.status_code} ({error.kind.value})"
            )
            return Result.failure(error)

        result = parse_body(body, response.status_code)
        if not result.ok:
            logger.warning(f"{descriptor.verb.value} {descriptor.path} returned malformed JSON")
        return result

    def execute(
        self,
        descriptor: RequestDescriptor,
        callback: Callback | None = None,
    ) -> "Future[Result]":
        """
        Submit a request without blocking the caller.

        Args:
            descriptor: Request to perform
            callback: Optional, invoked exactly once with (error, payload)

        Returns:
            Future resolving to the Result. Callback exceptions do not
            change it.
        """
        future = self._get_executor().submit(self._send_once, descriptor)
        if callback is not None:
            future.add_done_callback(lambda done: _dispatch(callback, done))
        return future

    def _send_once(self, descriptor: RequestDescriptor) -> Result:
        """send() for worker threads: the future always resolves to a Result."""
        try:
            return self.send(descriptor)
        except Exception as e:
            logger.exception(f"{descriptor.verb.value} {descriptor.path} failed unexpectedly")
            return Result.failure(_transport_error(e))

    def _get_executor(self) -> ThreadPoolExecutor:
        """Create the worker pool once, even when first calls race."""
        if self._executor is not None:
            return self._executor
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.config.max_workers,
                    thread_name_prefix="vultr",
                )
            return self._executor

    def close(self) -> None:
        """Wait for in-flight requests, then release the pool and session."""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        self._session.close()


def _transport_error(cause: BaseException) -> RequestError:
    return RequestError(
        kind=ErrorKind.TRANSPORT,
        message=f"{ErrorKind.TRANSPORT.description} ({cause})",
        cause=cause,
    )


def _dispatch(callback: Callback, future: "Future[Result]") -> None:
    """Hand a finished future to a (error, payload) callback."""
    if future.cancelled():
        callback(_transport_error(CancelledError("request cancelled before it was sent")), None)
        return

    cause = future.exception()
    if cause is not None:
        callback(_transport_error(cause), None)
        return

    result = future.result()
    if result.ok:
        callback(None, result.value)
    else:
        callback(result.error, result.error.body)
