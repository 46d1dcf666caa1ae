"""Dispatcher configuration.

AppConfig is a frozen dataclass: immutable after creation, handed to the
``Dispatcher`` constructor. There is no process-wide timeout setter; a
different default means a different config.
"""

from dataclasses import dataclass

from wren.errors import ConfigurationError

# Budget used when neither the handler nor the config provides one.
DEFAULT_TIMEOUT = 1.0

# Extra time the write path gets past the request deadline, so a handler
# that noticed its own timeout can still send the answer.
DEFAULT_WRITE_GRACE = 0.1


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Dispatcher configuration. Immutable after creation.

    All fields have working defaults. Override what you need::

        config = AppConfig(default_timeout=5.0, allow_cors=True)
    """

    # Deadlines (seconds)
    default_timeout: float = DEFAULT_TIMEOUT
    write_grace: float = DEFAULT_WRITE_GRACE

    # Auth
    token_header: str = "Token"

    # CORS preflight
    allow_cors: bool = False
    cors_allow_methods: tuple[str, ...] = ("GET", "PUT", "POST", "DELETE")
    cors_allow_headers: tuple[str, ...] = ("Content-Type", "Token")
    cors_max_age: int = 3600

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "info"

    def __post_init__(self) -> None:
        if self.default_timeout <= 0:
            msg = f"default_timeout must be positive, got {self.default_timeout!r}"
            raise ConfigurationError(msg)
        if self.write_grace < 0:
            msg = f"write_grace must not be negative, got {self.write_grace!r}"
            raise ConfigurationError(msg)
