"""
Error Handler
Supervision boundary for command handlers and background tasks
"""

import asyncio
import traceback
from typing import Any, Dict, Optional

from utils.logger import get_logger

FAILURE_MESSAGE = "❌ Something went wrong while running this command"


class ErrorHandler:
    """Logs and counts errors that escape command handlers."""

    def __init__(self):
        self.logger = get_logger("ErrorHandler")
        self.error_counts: Dict[str, int] = {}

    def initialize(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Install as the event loop's exception handler."""
        if loop is None:
            loop = asyncio.get_running_loop()

        loop.set_exception_handler(self._async_exception_handler)
        self.logger.info("Error handlers initialized")

    def _async_exception_handler(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        """Handle async exceptions."""
        exception = context.get("exception")
        if exception:
            self.handle_exception(exception, "loop")
        else:
            message = context.get("message", "Unknown async error")
            self.logger.error(f"Async error: {message}")

    def handle_exception(self, error: BaseException, context: str = "") -> int:
        """
        Handle an exception.

        Args:
            error: The exception that occurred
            context: Optional context string, e.g. "command:build"

        Returns:
            Number of errors seen so far for this context and error type
        """
        error_key = f"{context}:{type(error).__name__}"

        if context:
            self.logger.error(f"[{context}] {error}")
        else:
            self.logger.error(f"{error}")

        self.logger.debug(
            "Traceback:\n" + "".join(traceback.format_exception(type(error), error, error.__traceback__))
        )

        count = self.error_counts.get(error_key, 0) + 1
        self.error_counts[error_key] = count
        return count

    async def report_interaction_error(self, interaction: Any, error: BaseException, context: str = "") -> None:
        """Log a handler failure and tell the invoking user."""
        self.handle_exception(error, context)

        try:
            if interaction.response.is_done():
                await interaction.followup.send(FAILURE_MESSAGE, ephemeral=True)
            else:
                await interaction.response.send_message(FAILURE_MESSAGE, ephemeral=True)
        except Exception as e:
            self.logger.debug(f"Could not report error to user: {e}")


# Global error handler instance
_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler
