"""API V1 Router"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth, customers, staff, assignments, bills,
    settings, dashboard, cron
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(customers.router, prefix="/customers", tags=["Customers"])
api_router.include_router(staff.router, prefix="/staff", tags=["Staff"])
api_router.include_router(assignments.router, prefix="/assignments", tags=["Assignments"])
api_router.include_router(bills.router, prefix="/bills", tags=["Bills"])
api_router.include_router(settings.router, prefix="/settings", tags=["Settings"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(cron.router, prefix="/cron", tags=["Scheduler"])
