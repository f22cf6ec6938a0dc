"""Wire request construction for the Gravity client.

Every request targets ``{base_url}/{method_name}`` and repeats the method name
as the first query parameter (``?method={method_name}``); the engine relies on
both.
"""

import json
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote_plus, urlencode

from pydantic import BaseModel, ConfigDict

CLIENT_VERSION = "1.0.1"
CLIENT_VERSION_HEADER = "X-Gravity-RecEng-ClientVersion"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class WireRequest(BaseModel):
    """Fully built HTTP request, ready for the transport."""

    model_config = ConfigDict(frozen=True)

    url: str
    http_method: str
    headers: Dict[str, Optional[str]]
    body: Optional[bytes] = None


def encode_query_value(value: Any) -> str:
    """Encode a query parameter value.

    Booleans become ``"1"``/``"0"``, everything else its string form.
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def build_query_string(method_name: str, query_params: Optional[Mapping[str, Any]] = None) -> str:
    """Build the query string, starting with ``?method=``.

    Args:
        method_name: Engine method name
        query_params: Extra parameters; None values are left out

    Returns:
        Query string including the leading ``?``
    """
    query = "?method=" + quote_plus(method_name)
    params = [
        (name, encode_query_value(value))
        for name, value in (query_params or {}).items()
        if value is not None
    ]
    if params:
        query += "&" + urlencode(params)
    return query


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(element) for element in value]
    return value


def encode_body(body: Any) -> bytes:
    """Serialize a request body to compact JSON.

    Sequences keep their order, so repeated name/value pairs go out exactly
    as the caller arranged them.
    """
    return json.dumps(_to_jsonable(body), separators=(",", ":")).encode("utf-8")


def build_request(
    base_url: str,
    method_name: str,
    query_params: Optional[Mapping[str, Any]] = None,
    body: Any = None,
) -> WireRequest:
    """Build the wire request for an engine method.

    Args:
        base_url: Engine base URL
        method_name: Engine method name
        query_params: Extra query parameters
        body: Request body; None sends a bodyless GET

    Returns:
        The request descriptor
    """
    url = f"{base_url}/{method_name}{build_query_string(method_name, query_params)}"

    # None removes the header from the session defaults; no 100-continue round trip
    headers: Dict[str, Optional[str]] = {
        CLIENT_VERSION_HEADER: CLIENT_VERSION,
        "Expect": None,
    }

    if body is None:
        return WireRequest(url=url, http_method="GET", headers=headers)

    headers["Content-Type"] = JSON_CONTENT_TYPE
    return WireRequest(url=url, http_method="POST", headers=headers, body=encode_body(body))
