import logging
from typing import Any

logger = logging.getLogger(__name__)


class AnalyticsMiddleware:
    def __init__(self) -> None:
        self.command_counts: dict[str, int] = {}
        self.failure_counts: dict[str, int] = {}

    def __call__(self, dispatch_context: dict[str, Any], phase: str) -> None:
        command = dispatch_context.get("command")
        if command is None:
            return

        name = command.original_name
        if phase == "pre":
            self.command_counts[name] = self.command_counts.get(name, 0) + 1
            logger.info(f"Analytics: {name} used (total: {self.command_counts[name]})")

        elif phase == "post" and not dispatch_context.get("success"):
            self.failure_counts[name] = self.failure_counts.get(name, 0) + 1

    def get_stats(self) -> dict[str, int]:
        return self.command_counts.copy()

    def get_failures(self) -> dict[str, int]:
        return self.failure_counts.copy()

    def reset_stats(self) -> None:
        self.command_counts.clear()
        self.failure_counts.clear()


# Global instance
analytics_middleware = AnalyticsMiddleware()
