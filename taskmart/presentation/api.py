from fastapi import APIRouter

from taskmart.presentation.routers.v1.password import router as password_router
from taskmart.presentation.routes.health import router as health_router

api = APIRouter()
api.include_router(health_router)

# Add all v1 routers here
routers = (password_router,)
for router in routers:
    api.include_router(router, prefix="/v1")
