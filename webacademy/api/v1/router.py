"""
API v1 router configuration.
"""
from fastapi import APIRouter

from webacademy.api.v1.endpoints import (
    auth,
    courses,
    discussions,
    evaluation_calendars,
    filieres,
    guides,
    health,
    news,
    outils,
    settings,
    timetables,
)
from webacademy.api.v1.endpoints.admin import categories as admin_categories
from webacademy.api.v1.endpoints.admin import courses as admin_courses
from webacademy.api.v1.endpoints.admin import filieres as admin_filieres
from webacademy.api.v1.endpoints.admin import instructor_assignments as admin_assignments
from webacademy.api.v1.endpoints.admin import settings as admin_settings
from webacademy.api.v1.endpoints.admin import stats as admin_stats
from webacademy.api.v1.endpoints.admin import users as admin_users

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(courses.router, prefix="/courses", tags=["courses"])
api_router.include_router(discussions.router, prefix="/discussions", tags=["discussions"])
api_router.include_router(news.router, prefix="/news", tags=["news"])
api_router.include_router(guides.router, prefix="/guides", tags=["guides"])
api_router.include_router(outils.router, prefix="/outils", tags=["outils"])
api_router.include_router(timetables.router, prefix="/timetables", tags=["timetables"])
api_router.include_router(
    evaluation_calendars.router, prefix="/evaluation-calendars", tags=["evaluation-calendars"]
)
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(filieres.router, prefix="/filieres", tags=["filieres"])

# Admin
api_router.include_router(admin_stats.router, prefix="/admin/stats", tags=["admin"])
api_router.include_router(admin_courses.router, prefix="/admin/courses", tags=["admin"])
api_router.include_router(admin_users.router, prefix="/admin/users", tags=["admin"])
api_router.include_router(admin_categories.router, prefix="/admin/categories", tags=["admin"])
api_router.include_router(admin_filieres.router, prefix="/admin/filieres", tags=["admin"])
api_router.include_router(
    admin_assignments.router, prefix="/admin/instructor-assignments", tags=["admin"]
)
api_router.include_router(admin_settings.router, prefix="/admin/settings", tags=["admin"])
