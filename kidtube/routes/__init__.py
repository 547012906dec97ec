"""
FastAPI routers for all API endpoints.

Each module defines a router for one concern (recommendations, interests,
health, access gate). Routers stay thin: validation is done by the Pydantic
request models, orchestration by kidtube.services.
"""
