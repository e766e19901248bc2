"""Resilience – retry with backoff for broker calls."""
