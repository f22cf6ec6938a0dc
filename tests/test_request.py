"""Tests for wire request construction."""

import json
from urllib.parse import parse_qsl, urlsplit

from gravity_client.models import Event, NameValue, RecommendationContext
from gravity_client.request import (
    CLIENT_VERSION,
    CLIENT_VERSION_HEADER,
    build_query_string,
    build_request,
    encode_body,
    encode_query_value,
)

BASE_URL = "https://engine.test/WebshopServlet"


def test_method_parameter_comes_first():
    """``method`` leads the query string whatever else is present."""
    request = build_request(BASE_URL, "getItemRecommendation", {"userId": "u1", "cookieId": "c1"})

    assert request.url == (
        "https://engine.test/WebshopServlet/getItemRecommendation"
        "?method=getItemRecommendation&userId=u1&cookieId=c1"
    )


def test_method_parameter_without_other_params():
    """A call without parameters still carries ``method``."""
    assert build_query_string("testExceptionn") == "?method=testExceptionn"
    assert build_query_string("testExceptionn", {}) == "?method=testExceptionn"


def test_method_name_is_url_encoded():
    """The method name is form encoded in the query."""
    assert build_query_string("a b&c").startswith("?method=a+b%26c")


def test_none_parameters_are_omitted():
    """Parameters without a value are left out entirely."""
    query = build_query_string("getItemRecommendation", {"userId": "u1", "cookieId": None})

    assert "cookieId" not in query
    assert parse_qsl(urlsplit(query).query) == [("method", "getItemRecommendation"), ("userId", "u1")]


def test_parameter_values_are_url_encoded():
    """Values with reserved characters are escaped."""
    query = build_query_string("test", {"name": "Alice & Bob"})

    assert query == "?method=test&name=Alice+%26+Bob"


def test_boolean_encoding():
    """Booleans go out as 1/0."""
    assert encode_query_value(True) == "1"
    assert encode_query_value(False) == "0"
    assert encode_query_value(5) == "5"
    assert build_query_string("addEvents", {"async": False}) == "?method=addEvents&async=0"


def test_body_makes_a_post():
    """A request with a body is a JSON POST."""
    request = build_request(BASE_URL, "test", {"name": "Alice"}, "Alice")

    assert request.http_method == "POST"
    assert request.body == b'"Alice"'
    assert request.headers["Content-Type"].startswith("application/json")


def test_no_body_makes_a_get():
    """A request without a body sends nothing."""
    request = build_request(BASE_URL, "testExceptionn")

    assert request.http_method == "GET"
    assert request.body is None
    assert "Content-Type" not in request.headers


def test_empty_list_is_still_a_body():
    """An empty batch is sent, not dropped."""
    request = build_request(BASE_URL, "addEvents", {"async": True}, [])

    assert request.http_method == "POST"
    assert request.body == b"[]"


def test_headers():
    """Every request names the client version and suppresses Expect."""
    request = build_request(BASE_URL, "test", None, "x")

    assert request.headers[CLIENT_VERSION_HEADER] == CLIENT_VERSION
    assert "Expect" in request.headers
    assert request.headers["Expect"] is None


def test_context_body_uses_wire_names():
    """The recommendation context is serialized with the engine's names."""
    context = RecommendationContext(number_limit=5, scenario_id="HOMEPAGE_MAIN")

    request = build_request(BASE_URL, "getItemRecommendation", {"userId": "u1", "cookieId": "c1"}, context)
    payload = json.loads(request.body)

    assert payload["numberLimit"] == 5
    assert payload["scenarioId"] == "HOMEPAGE_MAIN"
    assert b'"numberLimit":5' in request.body


def test_encode_body_sequence_of_models():
    """A batch becomes a JSON array in the caller's order."""
    events = [
        Event(event_type="VIEW", item_id="i1", time=1),
        Event(event_type="BUY", item_id="i2", time=2, name_values=[NameValue("Quantity", "2")]),
    ]

    payload = json.loads(encode_body(events))

    assert [event["itemId"] for event in payload] == ["i1", "i2"]
    assert payload[1]["nameValues"] == [{"name": "Quantity", "value": "2"}]


def test_build_is_deterministic():
    """Building the same request twice gives identical output."""
    event = Event(event_type="VIEW", item_id="i1", time=1)

    first = build_request(BASE_URL, "addEvents", {"async": True}, [event])
    second = build_request(BASE_URL, "addEvents", {"async": True}, [event])

    assert first == second
