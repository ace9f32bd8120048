from fastapi import APIRouter

from app.api.routes import (
    administration,
    amendments,
    audit_logs,
    auth,
    communication,
    consultations,
    contracts,
    core,
    documents,
    files,
    health,
    plan,
    providers,
    security,
    users,
)

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(audit_logs.router)
api_router.include_router(files.router)

for module in (
    core,
    administration,
    documents,
    communication,
    providers,
    plan,
    consultations,
    contracts,
    amendments,
    security,
):
    for sub_router in module.routers:
        api_router.include_router(sub_router)
