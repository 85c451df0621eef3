from fastapi import APIRouter
from absenofc.api.v1.endpoints import log_activity, exports, dashboard, users

api_router = APIRouter()

# Register routes
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(log_activity.router, prefix="/log-activity", tags=["Log Activity"])
api_router.include_router(exports.router, prefix="/exports", tags=["Exports"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
