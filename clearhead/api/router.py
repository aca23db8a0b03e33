from fastapi import APIRouter
from clearhead.modules.providers.router import router as providers_router
from clearhead.modules.availability.router import router as availability_router
from clearhead.modules.bookings.router import router as bookings_router
from clearhead.modules.recommendations.router import router as recommendations_router
from clearhead.modules.accounts.router import router as accounts_router
from clearhead.modules.notifications.router import router as notifications_router
from clearhead.modules.reports.router import router as reports_router
from clearhead.modules.jobs.router import router as jobs_router

api_router = APIRouter()
api_router.include_router(providers_router, tags=["providers"])
api_router.include_router(availability_router, tags=["availability"])
api_router.include_router(bookings_router, tags=["bookings"])
api_router.include_router(recommendations_router, tags=["recommendations"])
api_router.include_router(accounts_router, tags=["accounts"])
api_router.include_router(notifications_router, tags=["notifications"])
api_router.include_router(reports_router, tags=["reports"])
api_router.include_router(jobs_router, tags=["jobs"])

@api_router.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}
