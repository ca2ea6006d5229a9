"""Exception hierarchy for npcdb with helpful error messages."""

from __future__ import annotations

from typing import Any


class NpcDBError(Exception):
    """Base exception for all npcdb errors.

    Carries a primary message plus optional hint and details so callers can
    surface a human-readable error while logging the structured context.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details."""
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ValidationError(NpcDBError):
    """Malformed or missing input in a request payload."""

    pass


class NotFoundError(NpcDBError):
    """An identifier did not resolve to a stored record."""

    pass


class DatabaseError(NpcDBError):
    """Database-related errors including connection and query issues."""

    pass


class ConstraintViolationError(DatabaseError):
    """A write was rejected by a foreign key or check constraint."""

    pass


class ConfigurationError(NpcDBError):
    """Invalid settings or unreadable configuration files."""

    pass


# Settings keys people commonly get wrong, mapped to the correct key
_CONFIG_KEY_SUGGESTIONS = {
    "db_path": "database_path",
    "database": "database_path",
    "db_timeout": "database_timeout",
    "pool_size": "database_pool_max_size",
    "host": "api_host",
    "port": "api_port",
    "loglevel": "log_level",
}


def check_config_keys(data: dict[str, Any]) -> None:
    """Raise ConfigurationError for well-known misspelled configuration keys.

    Args:
        data: Raw configuration mapping loaded from a file
    """
    for key in data:
        suggestion = _CONFIG_KEY_SUGGESTIONS.get(str(key).lower())
        if suggestion and suggestion not in data:
            raise ConfigurationError(
                message=f"Unknown configuration key '{key}'",
                hint=f"Did you mean '{suggestion}'?",
                details={"key": key, "suggestion": suggestion},
            )
