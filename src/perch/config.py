"""Application configuration.

PerchConfig is a frozen dataclass: immutable after creation, with typed fields
instead of string-key dict lookups.
"""

from dataclasses import dataclass

from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class PerchConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = PerchConfig(debug=True, strict_slashes=True)
    """

    # Error responses include the exception detail when True
    debug: bool = False

    # Matching: "/users/" only matches "/users/" (not "/users") when True
    strict_slashes: bool = False

    # Status used by App.redirect() when none is given
    redirect_status: int = 302

    # Content type of default-constructed responses
    default_content_type: str = "text/html; charset=utf-8"

    def __post_init__(self) -> None:
        if not 300 <= self.redirect_status <= 399:
            msg = f"redirect_status must be a 3xx code, got {self.redirect_status}"
            raise ConfigurationError(msg)
        if not self.default_content_type:
            msg = "default_content_type cannot be empty"
            raise ConfigurationError(msg)
