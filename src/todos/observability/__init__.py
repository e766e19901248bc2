"""Observability – structured logging and request correlation."""
from todos.observability.correlation import CorrelationContext, RequestContext
from todos.observability.logging import CorrelationProcessor, JsonLoggerFactory, get_logger

__all__ = [
    "CorrelationContext",
    "CorrelationProcessor",
    "JsonLoggerFactory",
    "RequestContext",
    "get_logger",
]
