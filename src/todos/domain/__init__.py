"""Domain layer – the Todo aggregate, its events and its repository port."""
