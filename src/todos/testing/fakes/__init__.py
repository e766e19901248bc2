"""Testing fakes – in-memory doubles for the repository, publisher and clock."""
from todos.testing.fakes.clock import EPOCH, FakeClock
from todos.testing.fakes.publisher import RecordingEventPublisher
from todos.testing.fakes.repository import InMemoryTodoRepository

__all__ = ["EPOCH", "FakeClock", "InMemoryTodoRepository", "RecordingEventPublisher"]
