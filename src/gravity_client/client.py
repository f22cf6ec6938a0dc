"""Client for the Gravity recommendation engine.

Example::

    config = ClientConfig(
        remote_url="https://saas.gravityrd.com/grrec-CustomerID-war/WebshopServlet",
        user="sampleUser",
        password="samplePasswd",
    )
    client = GravityClient(config)
    context = RecommendationContext(number_limit=5, scenario_id="HOMEPAGE_MAIN")
    recommendation = client.get_item_recommendation("user1", "123456789abcdef", context)
"""

from typing import Any, Mapping, Optional, Sequence, Type, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError

from gravity_client.config import ClientConfig
from gravity_client.errors import HttpError, ResponseDecodeError, classify
from gravity_client.models import Event, Item, ItemRecommendation, RecommendationContext, User
from gravity_client.request import CLIENT_VERSION, build_request
from gravity_client.transport import RawResponse, invoke
from gravity_client.utils.logging import LogLevel, get_logger, log_exception

logger = get_logger("client")

T = TypeVar("T")

# The engine exposes this diagnostic method with a doubled "n"
TEST_EXCEPTION_METHOD = "testExceptionn"


class GravityClient:
    """Sends events, items and users to the engine and fetches recommendations.

    Every call performs exactly one blocking HTTP request, bounded by the
    configured timeout, and raises a
    :class:`~gravity_client.errors.GravityError` subclass on failure.

    The ``is_async`` flag of the ``add_*`` methods is passed to the engine: when
    True the engine may answer before the data is persisted. The call itself is
    synchronous either way.
    """

    version = CLIENT_VERSION

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        """Initialize the client.

        Args:
            config: Client configuration
            session: Optional session to send every request through. When
                omitted a session is opened per call, which keeps the client
                safe to share between threads.

        Raises:
            ConfigError: If the configuration is invalid
        """
        config.validate_for_client()
        self.config = config
        self._session = session

    def add_event(self, event: Event, is_async: bool) -> None:
        """Add a single event.

        Args:
            event: Event to add
            is_async: Let the engine acknowledge before persisting
        """
        self.add_events([event], is_async)

    def add_events(self, events: Sequence[Event], is_async: bool) -> None:
        """Add events in one request.

        Args:
            events: Events to add
            is_async: Let the engine acknowledge before persisting
        """
        self._send_request("addEvents", {"async": is_async}, list(events))

    def add_item(self, item: Item, is_async: bool) -> None:
        """Add or update a single item."""
        self.add_items([item], is_async)

    def add_items(self, items: Sequence[Item], is_async: bool) -> None:
        """Add or update items in one request.

        Existing items are updated: name/value pairs sent for an item replace
        the stored ones with the same name.

        Args:
            items: Items to add
            is_async: Let the engine acknowledge before persisting
        """
        self._send_request("addItems", {"async": is_async}, list(items))

    def add_user(self, user: User, is_async: bool) -> None:
        """Add or update a single user."""
        self.add_users([user], is_async)

    def add_users(self, users: Sequence[User], is_async: bool) -> None:
        """Add or update users in one request.

        Args:
            users: Users to add
            is_async: Let the engine acknowledge before persisting
        """
        self._send_request("addUsers", {"async": is_async}, list(users))

    def get_item_recommendation(
        self, user_id: Optional[str], cookie_id: Optional[str], context: RecommendationContext
    ) -> ItemRecommendation:
        """Get item recommendations for a user.

        Args:
            user_id: Identifier of the user, None if not logged in
            cookie_id: Cookie identifier of the visitor
            context: Scenario and filters of the recommendation

        Returns:
            The recommendation
        """
        response = self._send_request(
            "getItemRecommendation",
            {"userId": user_id, "cookieId": cookie_id},
            context,
        )
        return self._decode("getItemRecommendation", response, ItemRecommendation)

    def test(self, name: str) -> str:
        """Check connectivity; the engine answers ``"Hello " + name``.

        Args:
            name: Name to echo

        Returns:
            The engine's greeting
        """
        response = self._send_request("test", {"name": name}, name)
        return self._decode("test", response, str)

    def test_exception(self) -> None:
        """Ask the engine to fail on purpose.

        Used to check error handling end to end; expected to raise
        :class:`~gravity_client.errors.HttpError`.
        """
        self._send_request(TEST_EXCEPTION_METHOD)

    def _send_request(
        self,
        method_name: str,
        query_params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> RawResponse:
        request = build_request(self.config.remote_url, method_name, query_params, body)
        outcome = invoke(self.config, request, self._session)

        error = classify(outcome)
        if error is not None:
            level = LogLevel.WARNING
            if isinstance(error, HttpError) and error.status_code >= 500:
                level = LogLevel.ERROR
            log_exception(logger, f"{method_name} failed: {error}", level=level, extra={"kind": error.kind.value})
            raise error

        return outcome

    def _decode(self, method_name: str, response: RawResponse, response_type: Type[T]) -> T:
        try:
            return TypeAdapter(response_type).validate_json(response.body)
        except ValidationError as e:
            log_exception(logger, f"Could not decode response of {method_name}", e)
            raise ResponseDecodeError(method_name, str(e)) from e
