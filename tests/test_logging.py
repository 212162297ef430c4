"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np

from inexactvi import VIP, Ball, Extragradient
from inexactvi.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name.startswith("inexactvi.")


def test_get_logger_keeps_package_names():
    """Module names inside the package are not prefixed twice."""
    logger = get_logger("inexactvi.vi.extragradient")
    assert logger.name == "inexactvi.vi.extragradient"
    assert get_logger().name == "inexactvi"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_get_logger_different_modules():
    """Test that different modules get different loggers."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_logger_output():
    """Test that logger outputs messages correctly."""
    logger = get_logger("test_module")
    captured = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=captured)
        logger.info("Test message")

        output = captured.getvalue()
        assert "Test message" in output
        assert "[INFO] inexactvi.test_module" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_set_log_level():
    """Test that set_log_level updates logger levels."""
    logger = get_logger("test_module")

    set_log_level(logging.INFO)
    assert logger.level == logging.INFO

    set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG

        set_log_level("error")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging_custom_format():
    """Test configure_logging with a custom format string."""
    logger = get_logger("test_module")
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, format_string="%(message)s", stream=stream)
        logger.debug("Debug message")
        assert stream.getvalue() == "Debug message\n"
    finally:
        configure_logging(level=logging.WARNING)


def test_solver_debug_messages_reach_stream():
    """Outer steps report progress at DEBUG level."""
    get_logger("inexactvi.vi.extragradient")
    stream = StringIO()
    vip = VIP(Ball(np.zeros(2), 1.0), lambda x: x, L=1.0)
    method = Extragradient(vip, alpha=0.1, gamma=0.05, x0=np.array([1.0, 0.0]))
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        it = iter(method)
        next(it)
        next(it)
        assert "extragradient k=1" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    logger = get_logger("test_module")
    assert logger.propagate is False


def test_multiple_loggers_independent():
    """Test that multiple loggers work independently."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")

    logger1.setLevel(logging.DEBUG)
    logger2.setLevel(logging.ERROR)

    assert logger1.level == logging.DEBUG
    assert logger2.level == logging.ERROR
    set_log_level(logging.WARNING)
