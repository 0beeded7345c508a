"""Security-related cross-cutting concerns (rate limiting)."""
