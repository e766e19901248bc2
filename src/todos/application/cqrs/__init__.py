"""Application CQRS – commands, queries and their in-process buses."""
from todos.application.cqrs.bus import CommandBus, InProcessCommandBus, InProcessQueryBus, QueryBus
from todos.application.cqrs.messages import Command, CommandHandler, Query, QueryHandler

__all__ = [
    "Command",
    "CommandBus",
    "CommandHandler",
    "InProcessCommandBus",
    "InProcessQueryBus",
    "Query",
    "QueryBus",
    "QueryHandler",
]
