"""Pydantic models for the Gravity recommendation engine wire format.

Attributes use snake_case in Python and camelCase on the wire. Models accept
either spelling on construction and always serialize with the wire names.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from gravity_client.utils.clock import system_clock

# Largest date the engine accepts; also the default expiry of an item
MAX_DATE = 2147483647


class EventType(str, Enum):
    """Event types documented by the recommendation engine.

    The engine may define further types, so plain strings are accepted too.
    """

    VIEW = "VIEW"
    BUY = "BUY"
    REC_CLICK = "REC_CLICK"
    ADD_TO_CART = "ADD_TO_CART"
    REMOVE_FROM_CART = "REMOVE_FROM_CART"
    RATING = "RATING"
    ADD_TO_FAVORITES = "ADD_TO_FAVORITES"
    REMOVE_FROM_FAVORITES = "REMOVE_FROM_FAVORITES"
    ADD_TO_WISHLIST = "ADD_TO_WISHLIST"
    REMOVE_FROM_WISHLIST = "REMOVE_FROM_WISHLIST"
    HIDE_PRODUCT = "HIDE_PRODUCT"
    UNHIDE_PRODUCT = "UNHIDE_PRODUCT"
    CLICK_OUT = "CLICK_OUT"
    LOGIN = "LOGIN"
    NEXT_RECOMMENDATION = "NEXT_RECOMMENDATION"
    PRODUCT_SEARCH = "PRODUCT_SEARCH"


class RecEngErrorCode(str, Enum):
    """Business validation error codes reported by the engine."""

    ERR_ITEMS_IS_NULL = "ERR_ITEMS_IS_NULL"
    ERR_ITEMS_HAS_NULL_ELEMENT = "ERR_ITEMS_HAS_NULL_ELEMENT"
    ERR_ITEMID_IS_NULL_OR_EMPTY = "ERR_ITEMID_IS_NULL_OR_EMPTY"
    ERR_USERS_IS_NULL = "ERR_USERS_IS_NULL"
    ERR_USERS_HAS_NULL_ELEMENT = "ERR_USERS_HAS_NULL_ELEMENT"
    ERR_USERID_IS_NULL_OR_EMPTY = "ERR_USERID_IS_NULL_OR_EMPTY"
    ERR_RATINGS_IS_NULL = "ERR_RATINGS_IS_NULL"
    ERR_RATINGS_HAS_NULL_ELEMENT = "ERR_RATINGS_HAS_NULL_ELEMENT"
    ERR_RECOMMENDATIONID_IS_NULL_OR_EMPTY = "ERR_RECOMMENDATIONID_IS_NULL_OR_EMPTY"
    ERR_ITEM_NOT_FOUND = "ERR_ITEM_NOT_FOUND"
    ERR_USER_NOT_FOUND = "ERR_USER_NOT_FOUND"
    ERR_EVENTS_IS_NULL = "ERR_EVENTS_IS_NULL"
    ERR_EVENTS_HAS_NULL_ELEMENT = "ERR_EVENTS_HAS_NULL_ELEMENT"
    ERR_INVALID_EVENT_TYPE = "ERR_INVALID_EVENT_TYPE"
    ERR_PARAM_IS_NULL = "ERR_PARAM_IS_NULL"
    ERR_NAMEVALUE_IS_NULL = "ERR_NAMEVALUE_IS_NULL"
    ERR_NAME_IN_NAMEVALUE_IS_NULL_OR_EMPTY = "ERR_NAME_IN_NAMEVALUE_IS_NULL_OR_EMPTY"
    ERR_VALUE_IN_NAMEVALUE_IS_NULL = "ERR_VALUE_IN_NAMEVALUE_IS_NULL"
    ERR_NAME_IN_NAMEVALUE_IS_NOT_ALLOWED = "ERR_NAME_IN_NAMEVALUE_IS_NOT_ALLOWED"
    ERR_ITEMID_INVALID_FROMTODATE = "ERR_ITEMID_INVALID_FROMTODATE"
    ERR_INVALID_EVENT_RECOMMENDATIONID = "ERR_INVALID_EVENT_RECOMMENDATIONID"
    ERR_INTERNAL_ERROR = "ERR_INTERNAL_ERROR"
    ERR_INVALID_METHOD_NAME = "ERR_INVALID_METHOD_NAME"


class ErrorKind(str, Enum):
    """Client-facing failure categories."""

    CONFIG_ERROR = "CONFIG_ERROR"
    HOST_RESOLUTION = "HOST_RESOLUTION"
    CONNECT = "CONNECT"
    TIMEOUT = "TIMEOUT"
    OTHER_TRANSPORT = "OTHER_TRANSPORT"
    HTTP_ERROR = "HTTP_ERROR"
    DECODE_ERROR = "DECODE_ERROR"


class WireModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase wire names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-ready representation sent to the engine."""
        return self.model_dump(mode="json", by_alias=True)


class NameValue(WireModel):
    """A name/value annotation.

    The same name may occur several times on one entity; the order of values
    sharing a name is significant and preserved.
    """

    name: str
    value: str

    def __init__(self, name: str, value: str, **data: Any) -> None:
        super().__init__(name=name, value=value, **data)


class Event(WireModel):
    """A user interaction reported to the engine.

    ``time`` defaults to the current time of the clock passed as ``clock``
    (the system clock when omitted).
    """

    event_type: str
    item_id: Optional[str] = None
    recommendation_id: Optional[str] = None
    time: int
    user_id: Optional[str] = None
    cookie_id: Optional[str] = None
    name_values: List[NameValue] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _default_time(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            clock = data.pop("clock", None) or system_clock
            if data.get("time") is None:
                data["time"] = clock()
        return data

    @field_validator("event_type", mode="before")
    @classmethod
    def _event_type_value(cls, value: Any) -> Any:
        if isinstance(value, EventType):
            return value.value
        return value


class Item(WireModel):
    """A catalog item.

    ``from_date``/``to_date`` bound the item's availability in unix seconds.
    The engine rejects ``from_date > to_date``; nothing is checked locally.
    """

    item_id: str
    title: Optional[str] = None
    item_type: Optional[str] = None
    hidden: Optional[bool] = None
    from_date: int = 0
    to_date: int = MAX_DATE
    name_values: List[NameValue] = Field(default_factory=list)


class User(WireModel):
    """A user record."""

    user_id: str
    name_values: List[NameValue] = Field(default_factory=list)
    hidden: Optional[bool] = None


class RecommendationContext(WireModel):
    """Parameters of a recommendation request.

    A ``number_limit`` of 0 and a ``result_name_values`` of None both mean
    "use the scenario's default".
    """

    recommendation_time: Optional[int] = None
    number_limit: int = 0
    scenario_id: str
    name_values: List[NameValue] = Field(default_factory=list)
    result_name_values: Optional[List[NameValue]] = None


class ItemRecommendation(WireModel):
    """Recommendation returned by the engine."""

    items: Optional[List[Item]] = None
    item_ids: List[Union[int, str]] = Field(default_factory=list)
    recommendation_id: Optional[str] = None

    @field_validator("item_ids", mode="before")
    @classmethod
    def _null_item_ids(cls, value: Any) -> Any:
        return [] if value is None else value


class RecEngException(WireModel):
    """Fault body returned by the engine with a non-200 response."""

    message: Optional[str] = None
    rec_eng_error_code: Optional[str] = None

    @property
    def error_code(self) -> Optional[RecEngErrorCode]:
        """Known error code, or None when absent or not a documented code."""
        try:
            return RecEngErrorCode(self.rec_eng_error_code)
        except ValueError:
            return None


class FaultInfo(WireModel):
    """Client-side description of a failure."""

    error_code: ErrorKind
