"""SQLAlchemy adapter – async engine, ORM model and Todo repository."""
from todos.adapters.sqlalchemy.models import Base, TodoRecord
from todos.adapters.sqlalchemy.repository import SqlAlchemyTodoRepository
from todos.adapters.sqlalchemy.session import SqlAlchemySessionFactory

__all__ = ["Base", "SqlAlchemySessionFactory", "SqlAlchemyTodoRepository", "TodoRecord"]
