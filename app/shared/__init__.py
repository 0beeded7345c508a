"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Failure classification and error responses
- Rate limiting
- Logging configuration
"""
