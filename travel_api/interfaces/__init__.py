"""
Interfaces layer package.

FastAPI routers for travel orders and health probes, with their
Pydantic schemas and dependency wiring. Routes translate HTTP into
use case calls; no business logic belongs here.
"""
