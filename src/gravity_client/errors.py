"""Error taxonomy and outcome classification for the Gravity client."""

import json
from typing import Dict, Optional, Type, Union

from pydantic import ValidationError

from gravity_client.models import ErrorKind, FaultInfo, RecEngException
from gravity_client.transport import RawResponse, TransportFailure, TransportFailureReason


class GravityError(Exception):
    """Base exception for Gravity client errors.

    Subclasses set ``kind``; callers should branch on the class or on
    ``kind`` rather than on the message text.
    """

    kind: ErrorKind
    detail: str = "Gravity client error"

    def __init__(self, detail: Optional[str] = None):
        """Initialize exception.

        Args:
            detail: Error detail message
        """
        if detail:
            self.detail = detail
        super().__init__(self.detail)

    @property
    def fault_info(self) -> FaultInfo:
        """Fault description carrying the error kind."""
        return FaultInfo(error_code=self.kind)


class ConfigError(GravityError):
    """Error raised when the client configuration is unusable."""

    kind = ErrorKind.CONFIG_ERROR
    detail = "Invalid configuration"


class CommunicationError(GravityError):
    """Base class for transport-level failures."""

    kind = ErrorKind.OTHER_TRANSPORT
    detail = "Error during request"


class HostResolutionError(CommunicationError):
    """Error raised when the engine's host name cannot be resolved."""

    kind = ErrorKind.HOST_RESOLUTION
    detail = "Could not resolve host"


class ConnectError(CommunicationError):
    """Error raised when no connection can be established."""

    kind = ErrorKind.CONNECT
    detail = "Could not connect to host"


class RequestTimeoutError(CommunicationError):
    """Error raised when a request exceeds the configured timeout."""

    kind = ErrorKind.TIMEOUT
    detail = "Timeout error"


class OtherTransportError(CommunicationError):
    """Error raised for any other transport failure."""

    kind = ErrorKind.OTHER_TRANSPORT
    detail = "Error during request"


class HttpError(GravityError):
    """Error raised when the engine answers with a status other than 200."""

    kind = ErrorKind.HTTP_ERROR
    detail = "Non-200 HTTP response code"

    def __init__(self, status_code: int, rec_eng_exception: Optional[RecEngException] = None):
        """Initialize exception.

        Args:
            status_code: HTTP status code of the response
            rec_eng_exception: Fault decoded from the response body, if any
        """
        self.status_code = status_code
        self.rec_eng_exception = rec_eng_exception

        detail = f"Non-200 HTTP response code: {status_code}"
        if rec_eng_exception is not None:
            detail += (
                f", Message: {rec_eng_exception.message}, "
                f"RecEngErrorCode: {rec_eng_exception.rec_eng_error_code}"
            )
        super().__init__(detail)

    @property
    def server_message(self) -> Optional[str]:
        """Message reported by the engine."""
        return self.rec_eng_exception.message if self.rec_eng_exception else None

    @property
    def rec_eng_error_code(self) -> Optional[str]:
        """Business error code reported by the engine."""
        return self.rec_eng_exception.rec_eng_error_code if self.rec_eng_exception else None


class ResponseDecodeError(GravityError):
    """Error raised when a successful response body cannot be decoded."""

    kind = ErrorKind.DECODE_ERROR
    detail = "Could not decode response"

    def __init__(self, method_name: str, reason: Optional[str] = None):
        """Initialize exception.

        Args:
            method_name: Engine method whose response failed to decode
            reason: Reason for the failure
        """
        self.method_name = method_name
        detail = f"Could not decode response of {method_name}"
        if reason:
            detail += f": {reason}"
        super().__init__(detail)


FAILURE_ERRORS: Dict[TransportFailureReason, Type[CommunicationError]] = {
    TransportFailureReason.HOST_RESOLUTION: HostResolutionError,
    TransportFailureReason.CONNECT: ConnectError,
    TransportFailureReason.TIMEOUT: RequestTimeoutError,
    TransportFailureReason.OTHER: OtherTransportError,
}


def decode_fault(body: bytes) -> Optional[RecEngException]:
    """Decode a fault body, giving up quietly on anything unexpected.

    Args:
        body: Raw response body

    Returns:
        The decoded fault, or None if the body carries none
    """
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    try:
        fault = RecEngException.model_validate(payload)
    except ValidationError:
        return None
    if fault.message is None and fault.rec_eng_error_code is None:
        return None
    return fault


def classify(outcome: Union[RawResponse, TransportFailure]) -> Optional[GravityError]:
    """Map a transport outcome to an error.

    Args:
        outcome: Result of a transport invocation

    Returns:
        The error to raise, or None if the request succeeded
    """
    if isinstance(outcome, TransportFailure):
        error_cls = FAILURE_ERRORS.get(outcome.reason, OtherTransportError)
        return error_cls(f"{error_cls.detail}: {outcome.message}")

    if outcome.status_code != 200:
        return HttpError(outcome.status_code, decode_fault(outcome.body))

    return None
