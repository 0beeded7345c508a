"""
Records API — school record-management backend.

Application package root. Resource CRUD is provided by collaborating
services; this package holds the shell they plug into and the shared
error boundary that renders every failure they raise.

Layers:
    - domain: Errors raised by record services. No framework imports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, rate limiting, logging).
    - core: Settings.
"""
