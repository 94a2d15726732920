from fastapi import APIRouter

from taskboard.api.endpoints import auth, health, lists, profile, search, tasks

router = APIRouter(prefix="/api")

router.include_router(health.router)
router.include_router(auth.router)
router.include_router(profile.router)
router.include_router(tasks.router)
router.include_router(search.router)
router.include_router(lists.router)
