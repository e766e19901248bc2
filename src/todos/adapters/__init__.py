"""Adapters – RabbitMQ, SQLAlchemy and FastAPI integrations."""
