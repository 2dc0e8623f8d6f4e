"""Tests for chatcommands/middleware/ modules"""

import time
from unittest.mock import MagicMock, patch

from chatcommands.core import CommandDispatcher
from chatcommands.middleware.analytics import AnalyticsMiddleware, analytics_middleware
from chatcommands.middleware.error_handler import (
    ErrorHandlerMiddleware,
    error_handler_middleware,
)
from chatcommands.middleware.logging import LoggingMiddleware, logging_middleware


def make_dispatch_context(name="ping", original_name=None, **overrides):
    command = MagicMock()
    command.original_name = original_name or name
    dispatch_context = {
        "command_name": name,
        "command": command,
        "line": name,
        "success": True,
        "ran": True,
        "result": None,
        "error": None,
    }
    dispatch_context.update(overrides)
    return dispatch_context


class TestLoggingMiddleware:
    """Test LoggingMiddleware functionality."""

    def setup_method(self):
        """Setup test instance."""
        self.middleware = LoggingMiddleware()

    def test_pre_phase_logs_dispatch_start(self):
        """Test that pre phase logs the start and tracks time."""
        dispatch_context = make_dispatch_context()

        with patch("chatcommands.middleware.logging.logger") as mock_logger:
            self.middleware(dispatch_context, "pre")

            mock_logger.debug.assert_called_once_with("Dispatch started: ping")
            assert id(dispatch_context) in self.middleware.start_times

    def test_post_phase_logs_completion_with_duration(self):
        """Test that post phase logs completion with duration."""
        dispatch_context = make_dispatch_context()
        self.middleware.start_times[id(dispatch_context)] = time.time() - 0.5

        with patch("chatcommands.middleware.logging.logger") as mock_logger:
            self.middleware(dispatch_context, "post")

            call_args = mock_logger.debug.call_args_list[0][0][0]
            assert "Dispatch completed: ping" in call_args
            assert "took" in call_args
            assert id(dispatch_context) not in self.middleware.start_times

    def test_post_phase_without_start_time(self):
        """Test post phase when no start time exists."""
        dispatch_context = make_dispatch_context(ran=False)

        with patch("chatcommands.middleware.logging.logger") as mock_logger:
            self.middleware(dispatch_context, "post")

            mock_logger.debug.assert_called_once_with("Dispatch completed: ping (not run)")

    def test_global_instance(self):
        """Test the module exposes a shared instance."""
        assert isinstance(logging_middleware, LoggingMiddleware)


class TestAnalyticsMiddleware:
    """Test AnalyticsMiddleware functionality."""

    def setup_method(self):
        """Setup test instance."""
        self.middleware = AnalyticsMiddleware()

    def test_counts_by_original_name(self):
        """Test aliases count towards their original command."""
        self.middleware(make_dispatch_context("ping"), "pre")
        self.middleware(make_dispatch_context("p", original_name="ping"), "pre")
        self.middleware(make_dispatch_context("roll"), "pre")

        assert self.middleware.get_stats() == {"ping": 2, "roll": 1}

    def test_counts_failures(self):
        """Test unsuccessful dispatches are counted in the post phase."""
        self.middleware(make_dispatch_context("ping", success=False), "post")
        self.middleware(make_dispatch_context("ping", success=True), "post")

        assert self.middleware.get_failures() == {"ping": 1}

    def test_stats_are_copies(self):
        """Test returned stats can't modify the middleware."""
        self.middleware(make_dispatch_context(), "pre")

        stats = self.middleware.get_stats()
        stats["ping"] = 100

        assert self.middleware.get_stats() == {"ping": 1}

    def test_reset_stats(self):
        """Test resetting clears all counters."""
        self.middleware(make_dispatch_context(), "pre")
        self.middleware(make_dispatch_context(success=False), "post")

        self.middleware.reset_stats()

        assert self.middleware.get_stats() == {}
        assert self.middleware.get_failures() == {}

    def test_with_dispatcher(self, registry, chat_settings):
        """Test the middleware counts real dispatches."""
        middleware = AnalyticsMiddleware()
        dispatcher = CommandDispatcher(registry, chat_settings, middleware=[middleware])
        registry.register({"name": "ping", "aliases": ["p"]})

        dispatcher.parse("ping")
        dispatcher.parse("p")

        assert middleware.get_stats() == {"ping": 2}

    def test_global_instance(self):
        """Test the module exposes a shared instance."""
        assert isinstance(analytics_middleware, AnalyticsMiddleware)


class TestErrorHandlerMiddleware:
    """Test ErrorHandlerMiddleware functionality."""

    def setup_method(self):
        """Setup test instance."""
        self.middleware = ErrorHandlerMiddleware()

    def test_logs_errors_in_post_phase(self):
        """Test errors are logged with their traceback."""
        try:
            raise ValueError("bad handler")
        except ValueError as e:
            error = e

        with patch("chatcommands.middleware.error_handler.logger") as mock_logger:
            self.middleware(make_dispatch_context("boom", error=error), "post")

            assert mock_logger.error.call_count == 2
            assert "Error in command boom: bad handler" in mock_logger.error.call_args_list[0][0][0]
            assert "Traceback" in mock_logger.error.call_args_list[1][0][0]

    def test_ignores_success(self):
        """Test nothing is logged without an error."""
        with patch("chatcommands.middleware.error_handler.logger") as mock_logger:
            self.middleware(make_dispatch_context(), "post")
            self.middleware(make_dispatch_context(error=ValueError("x")), "pre")

            mock_logger.error.assert_not_called()

    def test_global_instance(self):
        """Test the module exposes a shared instance."""
        assert isinstance(error_handler_middleware, ErrorHandlerMiddleware)
