# dayflow/core/admin.py
from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from fastapi import Request
from sqlalchemy import select
from dayflow.core.security import verify_password, create_access_token, decode_token
from dayflow.core.config import settings
from dayflow.core.database import db_helper
from dayflow.models.user import User, UserStats, UserRole
from dayflow.models.activity import DailyActivity
from dayflow.models.engagement import EarnedBadge


class AdminAuth(AuthenticationBackend):
    async def login(self, request: Request) -> bool:
        form = await request.form()
        email, password = form["username"], form["password"]

        async with db_helper.session_factory() as session:
            stmt = select(User).where(User.email == str(email).lower())
            user = (await session.execute(stmt)).scalar_one_or_none()

        if user and verify_password(password, user.password_hash) and user.role == UserRole.ADMIN.value:
            request.session.update({"token": create_access_token({"sub": str(user.id), "role": user.role})})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        token = request.session.get("token")
        if not token:
            return False
        try:
            payload = decode_token(token)
        except ValueError:
            return False
        return payload.get("role") == UserRole.ADMIN.value


class UserAdmin(ModelView, model=User):
    column_list = [User.id, User.name, User.email, User.role, User.created_at]
    column_searchable_list = [User.email, User.name]
    column_sortable_list = [User.id, User.created_at]
    form_excluded_columns = [User.password_hash, User.stats, User.badges]
    icon = "fa-solid fa-user"

class UserStatsAdmin(ModelView, model=UserStats):
    column_list = [
        UserStats.user_id,
        UserStats.tasks_completed,
        UserStats.total_pomodoros,
        UserStats.total_focus_minutes,
        UserStats.current_streak,
        UserStats.longest_streak,
    ]
    icon = "fa-solid fa-chart-simple"

class DailyActivityAdmin(ModelView, model=DailyActivity):
    # Derived analytics rows, inspect only
    can_create = False
    can_edit = False
    can_delete = False
    column_list = [
        DailyActivity.user_id,
        DailyActivity.day,
        DailyActivity.tasks_completed,
        DailyActivity.focus_minutes,
        DailyActivity.habits_completed,
        DailyActivity.notes_created,
        DailyActivity.schedule_events_completed,
        DailyActivity.score,
        DailyActivity.intensity,
    ]
    column_sortable_list = [DailyActivity.day, DailyActivity.score]
    icon = "fa-solid fa-fire"

class EarnedBadgeAdmin(ModelView, model=EarnedBadge):
    can_create = False
    can_edit = False
    can_delete = False
    column_list = [EarnedBadge.user_id, EarnedBadge.badge_id, EarnedBadge.tier, EarnedBadge.earned_at]
    column_searchable_list = [EarnedBadge.badge_id]
    icon = "fa-solid fa-medal"


def setup_admin(app, engine) -> Admin:
    authentication_backend = AdminAuth(secret_key=settings.security.JWT_SECRET_KEY.get_secret_value())
    admin = Admin(app, engine, authentication_backend=authentication_backend, title="DayFlow Admin")

    admin.add_view(UserAdmin)
    admin.add_view(UserStatsAdmin)
    admin.add_view(DailyActivityAdmin)
    admin.add_view(EarnedBadgeAdmin)
    return admin
