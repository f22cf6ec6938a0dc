"""HTTP transport for the Gravity client.

Executes a :class:`~gravity_client.request.WireRequest` exactly once with
``requests`` and reports either the raw response or a classified failure.
Nothing here raises for transport problems; the caller decides what to do
with a :class:`TransportFailure`.
"""

import socket
import time
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Union

import requests
from pydantic import BaseModel, ConfigDict
from requests.auth import HTTPBasicAuth
from urllib3.exceptions import NameResolutionError, NewConnectionError
from urllib3.exceptions import TimeoutError as Urllib3TimeoutError
from urllib3.util import Timeout as Urllib3Timeout

from gravity_client.request import WireRequest
from gravity_client.utils.logging import LogLevel, get_logger, log_exception

if TYPE_CHECKING:
    from gravity_client.config import ClientConfig

logger = get_logger("transport")

CHUNK_SIZE = 64 * 1024


class TransportFailureReason(str, Enum):
    """Why a request did not produce an HTTP response."""

    HOST_RESOLUTION = "host_resolution"
    CONNECT = "connect"
    TIMEOUT = "timeout"
    OTHER = "other"


class RawResponse(BaseModel):
    """Status and body of a completed HTTP exchange."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    body: bytes = b""


class TransportFailure(BaseModel):
    """A request that failed below the HTTP layer."""

    model_config = ConfigDict(frozen=True)

    reason: TransportFailureReason
    message: str


def _iter_causes(exc: BaseException) -> Iterator[BaseException]:
    # requests and urllib3 wrap the socket error several levels deep, via
    # exception args, MaxRetryError.reason and implicit chaining
    seen = set()
    pending: List[BaseException] = [exc]
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        linked = [getattr(current, "reason", None), current.__cause__, current.__context__, *current.args]
        pending.extend(item for item in linked if isinstance(item, BaseException))


def is_name_resolution_failure(exc: BaseException) -> bool:
    """Whether ``exc`` was caused by a failed DNS lookup."""
    return any(isinstance(cause, (NameResolutionError, socket.gaierror)) for cause in _iter_causes(exc))


def is_timeout(exc: BaseException) -> bool:
    """Whether ``exc`` was caused by a connect or read timeout."""
    # urllib3 derives NewConnectionError (and so NameResolutionError) from
    # ConnectTimeoutError; those are connection failures, not timeouts
    return any(
        isinstance(cause, (requests.Timeout, Urllib3TimeoutError, socket.timeout))
        and not isinstance(cause, NewConnectionError)
        for cause in _iter_causes(exc)
    )


def classify_exception(exc: requests.RequestException) -> TransportFailureReason:
    """Map a ``requests`` exception to a failure reason.

    Args:
        exc: Exception raised while executing the request

    Returns:
        Failure reason
    """
    if isinstance(exc, requests.Timeout):
        return TransportFailureReason.TIMEOUT
    if isinstance(exc, requests.exceptions.SSLError):
        return TransportFailureReason.OTHER
    if isinstance(exc, requests.ConnectionError):
        if is_name_resolution_failure(exc):
            return TransportFailureReason.HOST_RESOLUTION
        # a read timeout while streaming the body arrives as ConnectionError
        if is_timeout(exc):
            return TransportFailureReason.TIMEOUT
        return TransportFailureReason.CONNECT
    return TransportFailureReason.OTHER


def request_options(config: "ClientConfig", request: WireRequest) -> Dict[str, Any]:
    """Keyword arguments for ``Session.request`` derived from the config.

    Args:
        config: Client configuration
        request: Request to send

    Returns:
        Options for ``requests``
    """
    timeout = config.timeout_seconds
    options: Dict[str, Any] = {
        "headers": request.headers,
        "data": request.body,
        # connect time counts against the same total budget as the read
        "timeout": Urllib3Timeout(connect=timeout, total=timeout),
        "stream": True,
        "allow_redirects": False,
    }
    if config.uses_tls:
        options["verify"] = config.verify_peer_tls
    if config.user:
        options["auth"] = HTTPBasicAuth(config.user, config.password or "")
    return options


def _execute(
    session: requests.Session, config: "ClientConfig", request: WireRequest
) -> Union[RawResponse, TransportFailure]:
    timeout = config.timeout_seconds
    deadline = time.monotonic() + timeout
    logger.debug(f"{request.http_method} {request.url}")

    try:
        with session.request(request.http_method, request.url, **request_options(config, request)) as response:
            chunks = []
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    logger.warning(f"{request.http_method} {request.url} exceeded {timeout}s")
                    return TransportFailure(
                        reason=TransportFailureReason.TIMEOUT,
                        message=f"Operation timed out after {timeout} seconds",
                    )
            return RawResponse(status_code=response.status_code, body=b"".join(chunks))
    except requests.RequestException as e:
        reason = classify_exception(e)
        log_exception(
            logger,
            f"{request.http_method} {request.url} failed",
            e,
            level=LogLevel.WARNING,
            extra={"reason": reason.value},
        )
        return TransportFailure(reason=reason, message=str(e))


def invoke(
    config: "ClientConfig", request: WireRequest, session: Optional[requests.Session] = None
) -> Union[RawResponse, TransportFailure]:
    """Execute ``request`` once.

    Args:
        config: Client configuration (timeout, TLS, credentials)
        request: Request to send
        session: Session to send through; a new one is opened and closed
            for this call when omitted

    Returns:
        The raw response, or the transport failure
    """
    if session is not None:
        return _execute(session, config, request)

    with requests.Session() as owned_session:
        return _execute(owned_session, config, request)
