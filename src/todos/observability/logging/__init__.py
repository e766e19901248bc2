"""Observability – structured logging helpers."""
from todos.observability.logging.factory import JsonLoggerFactory
from todos.observability.logging.processors import CorrelationProcessor, get_logger

__all__ = ["CorrelationProcessor", "JsonLoggerFactory", "get_logger"]
