# 📄 File: app/modules/user_management/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# This file contains all the web endpoints for VideoTube accounts: signing up, logging in and out,
# keeping a session alive, changing passwords and pictures, channel pages and watch history.
#
# 🧪 Purpose (Technical Summary):
# FastAPI users endpoints mounted at /api/v1/users. Each handler resolves its services through
# dependencies, delegates to the domain layer, and wraps results in the ApiResponse envelope.
# Session tokens travel as http-only cookies and in the response body.
#
# 🔗 Dependencies:
# - FastAPI router, Form/File parameters, Response for cookies
# - app.modules.user_management.domain.services (AuthService, UserService)
# - app.modules.user_management.presentation.api.schemas.user_schemas (request/response schemas)
# - app.modules.user_management.presentation.dependencies (gate, services, upload stager)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (router inclusion)
# - API tests

"""
Users API Endpoints

- POST /register: Create an account with avatar and optional cover image
- POST /login: Start a session
- POST /logout: End the session
- POST /refresh-token: Rotate the refresh token
- POST /change-password: Replace the password
- GET /current-user: The authenticated account
- PATCH /update-account: Change display name and email
- PATCH /avatar, PATCH /cover-image: Replace media
- GET /c/{username}: Channel profile (optional authentication)
- GET /history: Watch history
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile, status

from app.modules.user_management.domain.models.user import User
from app.modules.user_management.domain.services import AuthService, UserService
from app.modules.user_management.presentation.api.schemas.user_schemas import (
    ChangePasswordRequest,
    ChannelProfileResponse,
    LoginData,
    LoginRequest,
    RefreshTokenRequest,
    TokenPairData,
    UpdateAccountRequest,
    UserResponse,
    WatchedVideoResponse,
)
from app.modules.user_management.presentation.dependencies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    get_app_settings,
    get_auth_service,
    get_optional_user,
    get_upload_stager,
    get_user_service,
    verify_jwt,
)
from app.shared.config.settings import Settings
from app.shared.core.responses import ApiResponse
from app.shared.infrastructure.storage.file_manager import UploadStager

logger = logging.getLogger(__name__)

# Create router
users_router = APIRouter()


def _set_session_cookies(response: Response, settings: Settings, access_token: str, refresh_token: str) -> None:
    options = {
        "httponly": True,
        "secure": settings.COOKIE_SECURE,
        "samesite": settings.COOKIE_SAMESITE,
    }
    response.set_cookie(ACCESS_TOKEN_COOKIE, access_token, **options)
    response.set_cookie(REFRESH_TOKEN_COOKIE, refresh_token, **options)


def _clear_session_cookies(response: Response, settings: Settings) -> None:
    options = {
        "httponly": True,
        "secure": settings.COOKIE_SECURE,
        "samesite": settings.COOKIE_SAMESITE,
    }
    response.delete_cookie(ACCESS_TOKEN_COOKIE, **options)
    response.delete_cookie(REFRESH_TOKEN_COOKIE, **options)


# =========================================================================
# REGISTRATION AND SESSION
# =========================================================================

@users_router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register new user account",
    description="Create an account from a multipart form with an avatar and an optional cover image",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Missing fields, missing avatar, or upload failure"},
        409: {"description": "User already exists"},
        413: {"description": "Uploaded file too large"},
    }
)
async def register(
    username: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    full_name: Optional[str] = Form(None, alias="fullName"),
    password: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None),
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
    user_service: UserService = Depends(get_user_service),
    stager: UploadStager = Depends(get_upload_stager),
) -> ApiResponse[UserResponse]:
    """
    Register a new user account.

    Uploaded files are staged locally, forwarded to the media host, and removed
    from the temp directory whatever the outcome.
    """
    logger.info(f"User registration attempt for username: {username}")

    avatar_path = await stager.stage(avatar, "avatar")
    cover_image_path = await stager.stage(cover_image, "coverImage")

    user = await user_service.register(
        username=username,
        email=email,
        full_name=full_name,
        password=password,
        avatar_path=avatar_path,
        cover_image_path=cover_image_path,
    )

    return ApiResponse.ok(
        UserResponse.from_domain(user),
        message="User registered successfully",
        status_code=status.HTTP_201_CREATED,
    )


@users_router.post(
    "/login",
    response_model=ApiResponse[LoginData],
    summary="User login",
    responses={
        200: {"description": "Login successful, session cookies set"},
        400: {"description": "Username or email is required"},
        401: {"description": "Invalid credentials"},
        404: {"description": "User not found"},
    }
)
async def login(
    login_data: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[LoginData]:
    """Authenticate with username or email and password; sets accessToken and refreshToken cookies."""
    user, access_token, refresh_token = await auth_service.login(
        password=login_data.password,
        username=login_data.username,
        email=login_data.email,
    )

    _set_session_cookies(response, settings, access_token, refresh_token)

    return ApiResponse.ok(
        LoginData(
            user=UserResponse.from_domain(user),
            access_token=access_token,
            refresh_token=refresh_token,
        ),
        message="User logged In Successfully",
    )


@users_router.post(
    "/logout",
    response_model=ApiResponse[Dict[str, Any]],
    summary="User logout",
)
async def logout(
    response: Response,
    current_user: User = Depends(verify_jwt),
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[Dict[str, Any]]:
    await auth_service.logout(current_user.id)
    _clear_session_cookies(response, settings)
    return ApiResponse.ok({}, message="User logged Out")


@users_router.post(
    "/refresh-token",
    response_model=ApiResponse[TokenPairData],
    summary="Refresh access token",
    description="Rotate the refresh token taken from the refreshToken cookie or the JSON body",
    responses={
        200: {"description": "New token pair issued"},
        401: {"description": "Missing, invalid, expired or already used refresh token"},
    }
)
async def refresh_access_token(
    request: Request,
    response: Response,
    body: Optional[RefreshTokenRequest] = None,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[TokenPairData]:
    incoming_token = request.cookies.get(REFRESH_TOKEN_COOKIE) or (body.refresh_token if body else None)

    access_token, refresh_token = await auth_service.refresh(incoming_token)
    _set_session_cookies(response, settings, access_token, refresh_token)

    return ApiResponse.ok(
        TokenPairData(access_token=access_token, refresh_token=refresh_token),
        message="Access token refreshed",
    )


# =========================================================================
# ACCOUNT
# =========================================================================

@users_router.post(
    "/change-password",
    response_model=ApiResponse[Dict[str, Any]],
    summary="Change password",
    responses={
        200: {"description": "Password changed"},
        400: {"description": "Missing fields or invalid old password"},
    }
)
async def change_password(
    password_data: ChangePasswordRequest,
    current_user: User = Depends(verify_jwt),
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[Dict[str, Any]]:
    await auth_service.change_password(
        current_user.id,
        password_data.old_password,
        password_data.new_password,
    )
    return ApiResponse.ok({}, message="Password changed successfully")


@users_router.get(
    "/current-user",
    response_model=ApiResponse[UserResponse],
    summary="Get current user information",
)
async def get_current_user(
    current_user: User = Depends(verify_jwt),
) -> ApiResponse[UserResponse]:
    return ApiResponse.ok(UserResponse.from_domain(current_user), message="User fetched successfully")


@users_router.patch(
    "/update-account",
    response_model=ApiResponse[UserResponse],
    summary="Update account details",
    responses={
        200: {"description": "Account updated"},
        400: {"description": "Missing fields"},
        409: {"description": "Email already in use"},
    }
)
async def update_account_details(
    account_data: UpdateAccountRequest,
    current_user: User = Depends(verify_jwt),
    user_service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    user = await user_service.update_account(current_user.id, account_data.full_name, account_data.email)
    return ApiResponse.ok(UserResponse.from_domain(user), message="Account details updated successfully")


@users_router.patch(
    "/avatar",
    response_model=ApiResponse[UserResponse],
    summary="Replace avatar image",
)
async def update_user_avatar(
    avatar: Optional[UploadFile] = File(None),
    current_user: User = Depends(verify_jwt),
    user_service: UserService = Depends(get_user_service),
    stager: UploadStager = Depends(get_upload_stager),
) -> ApiResponse[UserResponse]:
    avatar_path = await stager.stage(avatar, "avatar")
    user = await user_service.update_avatar(current_user.id, avatar_path)
    return ApiResponse.ok(UserResponse.from_domain(user), message="Avatar image updated successfully")


@users_router.patch(
    "/cover-image",
    response_model=ApiResponse[UserResponse],
    summary="Replace cover image",
)
async def update_user_cover_image(
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
    current_user: User = Depends(verify_jwt),
    user_service: UserService = Depends(get_user_service),
    stager: UploadStager = Depends(get_upload_stager),
) -> ApiResponse[UserResponse]:
    cover_image_path = await stager.stage(cover_image, "coverImage")
    user = await user_service.update_cover_image(current_user.id, cover_image_path)
    return ApiResponse.ok(UserResponse.from_domain(user), message="Cover image updated successfully")


# =========================================================================
# CHANNEL AND HISTORY
# =========================================================================

@users_router.get(
    "/c/{username}",
    response_model=ApiResponse[ChannelProfileResponse],
    summary="Get channel profile",
    description="Public channel page; isSubscribed reflects the caller when a valid access token is sent",
    responses={
        200: {"description": "Channel profile"},
        404: {"description": "Channel does not exist"},
    }
)
async def get_user_channel_profile(
    username: str,
    viewer: Optional[User] = Depends(get_optional_user),
    user_service: UserService = Depends(get_user_service),
) -> ApiResponse[ChannelProfileResponse]:
    profile = await user_service.get_channel_profile(username, viewer.id if viewer else None)
    return ApiResponse.ok(
        ChannelProfileResponse.from_domain(profile),
        message="User channel fetched successfully",
    )


@users_router.get(
    "/history",
    response_model=ApiResponse[List[WatchedVideoResponse]],
    summary="Get watch history",
)
async def get_watch_history(
    current_user: User = Depends(verify_jwt),
    user_service: UserService = Depends(get_user_service),
) -> ApiResponse[List[WatchedVideoResponse]]:
    videos = await user_service.get_watch_history(current_user.id)
    return ApiResponse.ok(
        [WatchedVideoResponse.from_domain(video) for video in videos],
        message="Watch history fetched successfully",
    )
