import logging
import time
from typing import Any

logger = logging.getLogger(__name__)


class LoggingMiddleware:
    def __init__(self) -> None:
        self.start_times: dict[int, float] = {}

    def __call__(self, dispatch_context: dict[str, Any], phase: str) -> None:
        command_name = dispatch_context.get("command_name")
        key = id(dispatch_context)

        if phase == "pre":
            self.start_times[key] = time.time()
            logger.debug(f"Dispatch started: {command_name}")

        elif phase == "post":
            start_time = self.start_times.pop(key, None)
            outcome = "ran" if dispatch_context.get("ran") else "not run"
            if start_time:
                duration = time.time() - start_time
                logger.debug(f"Dispatch completed: {command_name} ({outcome}, took {duration:.3f}s)")
            else:
                logger.debug(f"Dispatch completed: {command_name} ({outcome})")


# Global instance
logging_middleware = LoggingMiddleware()
