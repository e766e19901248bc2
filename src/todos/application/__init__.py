"""Application layer – CQRS plumbing and the todo use cases."""
