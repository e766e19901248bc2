"""
todos – Task-management API with reliable domain-event publishing.

Import path convention::

    from todos.kernel.errors import NotFoundError
    from todos.domain.todos import Todo, Priority
    from todos.adapters.rabbitmq import RabbitMQEventPublisher
    from todos.adapters.fastapi import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
