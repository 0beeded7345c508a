"""
Interfaces layer package.

Contains FastAPI routers and Pydantic response schemas.
No business logic belongs here. Resource routers are mounted by the
collaborating services; failures they raise are rendered by
``app.shared.errors``.
"""
