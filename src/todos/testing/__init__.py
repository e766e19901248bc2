"""Testing – in-memory doubles for the todos ports."""
