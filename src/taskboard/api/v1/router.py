from fastapi import APIRouter

from src.taskboard.api.v1 import admin, auth, projects, realtime, tasks, teams, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(teams.router)
api_router.include_router(projects.router)
api_router.include_router(tasks.router)
api_router.include_router(admin.router)
api_router.include_router(realtime.router)
