"""RabbitMQ adapter – shared robust connection and reliable event publisher."""
from todos.adapters.rabbitmq.connection import RabbitMQConnectionManager
from todos.adapters.rabbitmq.publisher import RabbitMQEventPublisher

__all__ = ["RabbitMQConnectionManager", "RabbitMQEventPublisher"]
