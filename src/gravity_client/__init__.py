"""Python client for the Gravity recommendation engine."""

from gravity_client.client import GravityClient
from gravity_client.config import ClientConfig
from gravity_client.errors import (
    CommunicationError,
    ConfigError,
    ConnectError,
    GravityError,
    HostResolutionError,
    HttpError,
    OtherTransportError,
    RequestTimeoutError,
    ResponseDecodeError,
)
from gravity_client.models import (
    ErrorKind,
    Event,
    EventType,
    FaultInfo,
    Item,
    ItemRecommendation,
    NameValue,
    RecEngErrorCode,
    RecEngException,
    RecommendationContext,
    User,
)
from gravity_client.request import CLIENT_VERSION as __version__

__all__ = [
    "GravityClient",
    "ClientConfig",
    "GravityError",
    "ConfigError",
    "CommunicationError",
    "HostResolutionError",
    "ConnectError",
    "RequestTimeoutError",
    "OtherTransportError",
    "HttpError",
    "ResponseDecodeError",
    "ErrorKind",
    "Event",
    "EventType",
    "FaultInfo",
    "Item",
    "ItemRecommendation",
    "NameValue",
    "RecEngErrorCode",
    "RecEngException",
    "RecommendationContext",
    "User",
]
