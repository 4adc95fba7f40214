"""Mount all /api routes."""

from fastapi import APIRouter

from registry.routers import categories, discovery, search, tools, trending

api_router = APIRouter(prefix="/api")
api_router.include_router(tools.router)
api_router.include_router(search.router)
api_router.include_router(trending.router)
api_router.include_router(categories.router)
api_router.include_router(discovery.router)
