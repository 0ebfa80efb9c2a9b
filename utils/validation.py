"""
Validation Utilities
Helper functions for validating Discord IDs and command input
"""

import re
from typing import Any, Optional, Union

# Discord snowflake ID pattern: 17-20 digits
SNOWFLAKE_REGEX = re.compile(r"^[0-9]{17,20}$")

# Chat-input command and option names as accepted by the registration API
COMMAND_NAME_REGEX = re.compile(r"^[-_\w]{1,32}$")

MAX_DESCRIPTION_LENGTH = 100


class ValidationResult:
    """Result of a validation operation."""

    def __init__(
        self,
        valid: bool,
        error: Optional[str] = None,
        sanitized: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        self.valid = valid
        self.error = error
        self.sanitized = sanitized
        self.value = value

    def __bool__(self) -> bool:
        return self.valid


class ValidationUtils:
    """Utility class for input validation."""

    @staticmethod
    def is_valid_snowflake(id_value: Union[str, int]) -> bool:
        """
        Check if value is a valid Discord snowflake ID.

        Args:
            id_value: ID to validate

        Returns:
            True if valid snowflake
        """
        if isinstance(id_value, bool) or not isinstance(id_value, (str, int)):
            return False
        return bool(SNOWFLAKE_REGEX.match(str(id_value)))

    @staticmethod
    def _validate_snowflake(value: Optional[Union[str, int]], label: str) -> ValidationResult:
        if not value:
            return ValidationResult(valid=False, error=f"{label} ID is required")

        sanitized = ValidationUtils.sanitize_input(str(value))

        if not ValidationUtils.is_valid_snowflake(sanitized):
            return ValidationResult(valid=False, error=f"{label} ID is faulty: {value}")

        return ValidationResult(valid=True, sanitized=sanitized)

    @staticmethod
    def validate_guild_id(guild_id: Optional[Union[str, int]]) -> ValidationResult:
        """
        Validate and sanitize a guild/server ID.

        Args:
            guild_id: Guild ID to validate

        Returns:
            ValidationResult with valid status and sanitized value
        """
        return ValidationUtils._validate_snowflake(guild_id, "Guild")

    @staticmethod
    def validate_client_id(client_id: Optional[Union[str, int]]) -> ValidationResult:
        """
        Validate and sanitize an application (client) ID.

        Args:
            client_id: Application ID to validate

        Returns:
            ValidationResult with valid status and sanitized value
        """
        return ValidationUtils._validate_snowflake(client_id, "Client")

    @staticmethod
    def validate_command_name(name: Any) -> ValidationResult:
        """Check a command or option name against the API's naming rules."""
        if not isinstance(name, str) or not COMMAND_NAME_REGEX.match(name):
            return ValidationResult(valid=False, error=f"Invalid command name: {name!r}")
        if name != name.lower():
            return ValidationResult(valid=False, error=f"Command names must be lowercase: {name!r}")
        return ValidationResult(valid=True, sanitized=name)

    @staticmethod
    def validate_description(description: Any) -> ValidationResult:
        """Descriptions are required for chat-input commands and capped at 100 chars."""
        if not isinstance(description, str) or not description:
            return ValidationResult(valid=False, error="Description is required")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            return ValidationResult(
                valid=False,
                error=f"Description too long ({len(description)}/{MAX_DESCRIPTION_LENGTH})",
            )
        return ValidationResult(valid=True, sanitized=description)

    @staticmethod
    def sanitize_input(input_value: str) -> str:
        """
        Sanitize user input to prevent injection.

        Args:
            input_value: Input to sanitize

        Returns:
            Sanitized input string
        """
        if not isinstance(input_value, str):
            return ""

        # Trim whitespace
        sanitized = input_value.strip()

        # Remove zero-width characters
        sanitized = re.sub(r"[\u200B-\u200D\uFEFF]", "", sanitized)

        # Remove control characters
        sanitized = re.sub(r"[\x00-\x1F\x7F-\x9F]", "", sanitized)

        return sanitized
