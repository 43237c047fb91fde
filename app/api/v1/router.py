# 📄 File: app/api/v1/router.py
# 🧭 Purpose (Layman Explanation): 
# This file acts like a traffic director for all API version 1 requests, sending account
# requests to the users handlers.
# 🧪 Purpose (Technical Summary): 
# Main API v1 router aggregation that combines module routers under their route prefixes.
# 🔗 Dependencies: 
# FastAPI, app.modules.user_management.presentation.api.v1.users
# 🔄 Connected Modules / Calls From: 
# app.main.py (mounted at /api/v1)

import logging

from fastapi import APIRouter

from app.modules.user_management.presentation.api.v1.users import users_router
from app.shared.core.responses import ApiResponse

from . import ROUTE_PREFIXES, get_api_info

logger = logging.getLogger(__name__)

# Create main API v1 router
api_v1_router = APIRouter()


@api_v1_router.get("/",
                  summary="API v1 Information",
                  description="Get API v1 version information and route prefixes",
                  tags=["API Info"])
async def api_v1_info() -> ApiResponse[dict]:
    return ApiResponse.ok(get_api_info(), message="VideoTube API v1")


# =========================================================================
# MODULE ROUTER INCLUDES - USER MANAGEMENT MODULE
# =========================================================================

api_v1_router.include_router(
    users_router,
    prefix=ROUTE_PREFIXES["users"],
    tags=["Users"]
)
logger.debug("Users router loaded")
