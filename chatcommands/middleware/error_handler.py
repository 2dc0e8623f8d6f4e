import logging
import traceback
from typing import Any

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    def __call__(self, dispatch_context: dict[str, Any], phase: str) -> None:
        if phase == "post" and dispatch_context.get("error"):
            error = dispatch_context["error"]
            command_name = dispatch_context.get("command_name", "unknown")

            logger.error(f"Error in command {command_name}: {error}")
            logger.error(
                f"Traceback: {''.join(traceback.format_exception(type(error), error, error.__traceback__))}"
            )


# Global instance
error_handler_middleware = ErrorHandlerMiddleware()
