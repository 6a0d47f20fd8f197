from fastapi import APIRouter
from app.api.endpoints import pages, query

api_router = APIRouter()

# Combine all sub-routers into one
api_router.include_router(pages.router)
api_router.include_router(query.router)
