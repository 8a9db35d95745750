from fastapi import APIRouter

from src.chancery.api.v1 import approvals, auth, invites, pages

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(invites.router)
api_router.include_router(pages.router)
api_router.include_router(approvals.router)
