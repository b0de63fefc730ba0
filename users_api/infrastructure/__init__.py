"""Infrastructure Layer: cross-cutting concerns (logging setup, process metrics)."""
