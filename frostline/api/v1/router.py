from fastapi import APIRouter

from frostline.api.v1.endpoints import journal, plants, settings, tasks, users

api_router = APIRouter()

api_router.include_router(users.router)
api_router.include_router(plants.router)
api_router.include_router(tasks.router)
api_router.include_router(settings.router)
api_router.include_router(journal.router)
