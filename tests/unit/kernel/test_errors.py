"""Unit tests for the error hierarchy."""
from __future__ import annotations

import pytest

from todos.domain.todos import Priority, TodoCreatedEvent
from todos.kernel.errors import (
    ApplicationError,
    BaseError,
    ConnectionError,
    DomainError,
    InfrastructureError,
    InvalidStateError,
    NotFoundError,
    PublishError,
    SerializationError,
    StorageError,
    ValidationError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type, parent",
        [
            (ValidationError, DomainError),
            (NotFoundError, DomainError),
            (InvalidStateError, ApplicationError),
            (ConnectionError, InfrastructureError),
            (StorageError, InfrastructureError),
            (SerializationError, InfrastructureError),
            (PublishError, InfrastructureError),
            (DomainError, BaseError),
            (ApplicationError, BaseError),
            (InfrastructureError, BaseError),
        ],
    )
    def test_subclassing(self, exc_type, parent):
        assert issubclass(exc_type, parent)

    def test_connection_error_does_not_shadow_builtin_hierarchy(self):
        assert not issubclass(ConnectionError, OSError)


class TestBaseError:
    def test_default_code_and_str(self):
        err = DomainError("rule broken")
        assert err.code == "domain_error"
        assert str(err) == "rule broken"

    def test_cause_is_chained(self):
        cause = OSError("disk")
        err = StorageError("add", cause=cause)
        assert err.__cause__ is cause
        assert str(err) == "Storage operation 'add' failed: disk"
        assert err.to_dict()["cause"] == repr(cause)
        assert "cause" not in err.to_dict(include_cause=False)

    def test_to_dict(self):
        err = BaseError("x", code="custom", detail={"a": 1})
        assert err.to_dict() == {"code": "custom", "message": "x", "detail": {"a": 1}}


class TestDomainErrors:
    def test_not_found_message(self):
        err = NotFoundError("Todo", "abc")
        assert err.message == "Todo with id abc not found"
        assert (err.resource, err.identifier) == ("Todo", "abc")
        assert NotFoundError("Todo").message == "Todo not found"

    def test_validation_details(self):
        err = ValidationError(
            "bad",
            errors=[{"field": "title", "message": "Title is required"}],
        )
        assert err.details == ["Title is required"]
        payload = err.to_dict()
        assert payload["errors"][0]["field"] == "title"
        assert payload["details"] == ["Title is required"]


class TestInfrastructureErrors:
    def test_connection_error(self):
        err = ConnectionError("rabbitmq")
        assert err.resource == "rabbitmq"
        assert err.message == "Could not connect to 'rabbitmq'"

    def test_publish_error(self):
        event = TodoCreatedEvent(todo_id="1", title="t", description=None, priority=Priority.LOW)
        err = PublishError("TodoCreatedEvent", attempts=4, pending_events=[event])
        assert err.message == "Failed to publish event TodoCreatedEvent after 4 attempts"
        assert err.pending_events == (event,)
        assert err.code == "publish_error"

    def test_serialization_error(self):
        err = SerializationError("nope", payload_type="TodoCreatedEvent")
        assert err.payload_type == "TodoCreatedEvent"


class TestApplicationErrors:
    def test_invalid_state_records_component(self):
        err = InvalidStateError("closed", component="publisher")
        assert err.component == "publisher"
        assert err.to_dict()["detail"] == {"component": "publisher"}
