"""Client configuration for the Gravity client."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gravity_client.errors import ConfigError

DEFAULT_TIMEOUT_SECONDS = 3

INVALID_TIMEOUT_MESSAGE = "Invalid configuration. Timeout must be a positive integer."
MISSING_URL_MESSAGE = "Invalid configuration. Remote URL must be specified."


class ClientConfig(BaseModel):
    """Connection settings of a :class:`~gravity_client.client.GravityClient`.

    Example::

        config = ClientConfig(
            remote_url="https://saas.gravityrd.com/grrec-CustomerID-war/WebshopServlet",
            user="sampleUser",
            password="samplePasswd",
        )
    """

    model_config = ConfigDict(frozen=True)

    remote_url: Optional[str] = Field(None, description="Base URL of the engine servlet")
    timeout_seconds: int = Field(
        DEFAULT_TIMEOUT_SECONDS, description="Connect and total request timeout in seconds"
    )
    verify_peer_tls: bool = Field(True, description="Verify the server certificate for https URLs")
    user: Optional[str] = Field(None, description="Basic auth user name")
    password: Optional[str] = Field(None, repr=False, description="Basic auth password")

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            fields = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
            if "timeout_seconds" in fields:
                raise ConfigError(INVALID_TIMEOUT_MESSAGE) from e
            raise ConfigError(f"Invalid configuration. Invalid value for: {', '.join(sorted(fields))}.") from e

    @property
    def uses_tls(self) -> bool:
        """Whether requests go over https."""
        return bool(self.remote_url) and self.remote_url.lower().startswith("https")

    def validate_for_client(self) -> None:
        """Check the settings a client cannot work without.

        Raises:
            ConfigError: If the timeout is not positive or the remote URL is missing
        """
        if self.timeout_seconds <= 0:
            raise ConfigError(INVALID_TIMEOUT_MESSAGE)
        if not self.remote_url:
            raise ConfigError(MISSING_URL_MESSAGE)
