from fastapi import APIRouter

from scorekeeper.routes import admin, judge, public, reports

router = APIRouter(prefix="/api")
router.include_router(public.router)
router.include_router(admin.router)
router.include_router(judge.router)
router.include_router(reports.router)

__all__ = ["router"]
