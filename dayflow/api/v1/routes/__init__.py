from fastapi import APIRouter
from dayflow.api.v1.routes import auth
from .activity import router as activity_router
from .badges import router as badges_router
from .dashboard import router as dashboard_router
from .habits import router as habits_router
from .notes import router as notes_router
from .pomodoro import router as pomodoro_router
from .schedule import router as schedule_router
from .tasks import router as tasks_router


api_router = APIRouter()

api_router.include_router(auth.router, tags=["auth"])

api_router.include_router(tasks_router)
api_router.include_router(pomodoro_router)
api_router.include_router(habits_router)
api_router.include_router(notes_router)
api_router.include_router(schedule_router)
api_router.include_router(badges_router)
api_router.include_router(activity_router)
api_router.include_router(dashboard_router)
