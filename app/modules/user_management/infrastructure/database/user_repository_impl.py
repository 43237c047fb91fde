# 📄 File: app/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# This file handles all database operations for VideoTube accounts, like creating new users,
# finding them by name or email, saving their login session token, and reading their watch history.
#
# 🧪 Purpose (Technical Summary):
# Concrete implementation of UserRepository interface using SQLAlchemy ORM,
# providing async database operations for user entities with error handling and logging.
# Each write commits on its own.
#
# 🔗 Dependencies:
# - app.modules.user_management.domain.repositories.user_repository (interface)
# - app.modules.user_management.domain.models.user (domain model)
# - app.modules.user_management.infrastructure.database.models (SQLAlchemy models)
# - SQLAlchemy async session and query operations
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.domain.services (auth and user services)
# - app.modules.user_management.presentation.dependencies (repository wiring)

"""
User Repository Implementation

Handles the mapping between domain User entities and UserModel records, plus
the ordered watch history rows that belong to an account.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.domain.models.user import User
from app.modules.user_management.domain.repositories.user_repository import UserRepository
from app.modules.user_management.infrastructure.database.models import UserModel, WatchHistoryModel
from app.shared.core.exceptions import ConflictError, RepositoryError
from app.shared.infrastructure.database.session import get_db_session


logger = logging.getLogger(__name__)


class UserRepositoryImpl(UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.
    """
    
    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        """
        Initialize the user repository.
        
        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
    
    async def create(self, user: User) -> User:
        """
        Create a new user in the database.
        
        Raises:
            ConflictError: If username or email already exists
            RepositoryError: For other database errors
        """
        try:
            user_model = self._domain_to_model(user)
            self._session.add(user_model)
            await self._session.commit()
            
            logger.info(f"Created user with ID: {user_model.id}")
            return self._model_to_domain(user_model)
            
        except IntegrityError as e:
            await self._session.rollback()
            logger.warning(f"User creation failed - username or email taken: {user.username} / {user.email}")
            raise ConflictError(
                "User with email or username already exists",
                fields=["username", "email"]
            ) from e
            
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error during user creation: {str(e)}")
            raise RepositoryError("Failed to create user", operation="create") from e
    
    async def get_by_id(self, user_id: str) -> Optional[User]:
        user_model = await self._get_model(user_id)
        if user_model is None:
            logger.debug(f"User not found: {user_id}")
            return None
        return self._model_to_domain(user_model)
    
    async def get_by_username(self, username: str) -> Optional[User]:
        try:
            stmt = select(UserModel).where(UserModel.username == username)
            result = await self._session.execute(stmt)
            user_model = result.scalar_one_or_none()
            return self._model_to_domain(user_model) if user_model else None
            
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving user by username {username}: {str(e)}")
            raise RepositoryError("Failed to retrieve user", operation="get_by_username") from e
    
    async def find_by_username_or_email(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None
    ) -> Optional[User]:
        conditions = []
        if username:
            conditions.append(UserModel.username == username)
        if email:
            conditions.append(UserModel.email == email)
        if not conditions:
            return None
        
        try:
            stmt = select(UserModel).where(or_(*conditions)).limit(1)
            result = await self._session.execute(stmt)
            user_model = result.scalars().first()
            return self._model_to_domain(user_model) if user_model else None
            
        except SQLAlchemyError as e:
            logger.error(f"Database error looking up user {username!r}/{email!r}: {str(e)}")
            raise RepositoryError("Failed to retrieve user", operation="find") from e
    
    async def email_taken_by_other(self, email: str, user_id: str) -> bool:
        try:
            stmt = select(func.count()).select_from(UserModel).where(
                UserModel.email == email,
                UserModel.id != user_id
            )
            result = await self._session.execute(stmt)
            return (result.scalar_one() or 0) > 0
            
        except SQLAlchemyError as e:
            logger.error(f"Database error checking email {email}: {str(e)}")
            raise RepositoryError("Failed to check email", operation="email_taken") from e
    
    async def set_refresh_token(self, user_id: str, refresh_token: str) -> None:
        await self._update_fields(user_id, "set_refresh_token", refresh_token=refresh_token)
    
    async def clear_refresh_token(self, user_id: str) -> None:
        await self._update_fields(user_id, "clear_refresh_token", refresh_token=None)
    
    async def update_password_hash(self, user_id: str, password_hash: str) -> None:
        await self._update_fields(user_id, "update_password", password_hash=password_hash)
    
    async def update_account_details(
        self,
        user_id: str,
        full_name: str,
        email: str
    ) -> Optional[User]:
        return await self._update_fields(
            user_id, "update_account_details", full_name=full_name, email=email
        )
    
    async def update_avatar(self, user_id: str, url: str, public_id: str) -> Optional[User]:
        return await self._update_fields(
            user_id, "update_avatar", avatar=url, avatar_public_id=public_id
        )
    
    async def update_cover_image(self, user_id: str, url: str, public_id: str) -> Optional[User]:
        return await self._update_fields(
            user_id, "update_cover_image", cover_image=url, cover_image_public_id=public_id
        )
    
    async def add_to_watch_history(self, user_id: str, video_id: str) -> None:
        try:
            stmt = select(func.max(WatchHistoryModel.position)).where(
                WatchHistoryModel.user_id == user_id
            )
            result = await self._session.execute(stmt)
            last_position = result.scalar_one_or_none()
            next_position = 0 if last_position is None else last_position + 1
            
            self._session.add(WatchHistoryModel(
                user_id=user_id,
                position=next_position,
                video_id=video_id,
                watched_at=datetime.now(timezone.utc)
            ))
            await self._session.commit()
            
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error appending watch history for {user_id}: {str(e)}")
            raise RepositoryError("Failed to update watch history", operation="add_to_watch_history") from e
    
    async def get_watch_history_ids(self, user_id: str) -> List[str]:
        try:
            stmt = (
                select(WatchHistoryModel.video_id)
                .where(WatchHistoryModel.user_id == user_id)
                .order_by(WatchHistoryModel.position)
            )
            result = await self._session.execute(stmt)
            return [str(video_id) for video_id in result.scalars().all()]
            
        except SQLAlchemyError as e:
            logger.error(f"Database error reading watch history for {user_id}: {str(e)}")
            raise RepositoryError("Failed to read watch history", operation="get_watch_history") from e
    
    async def _get_model(self, user_id: str) -> Optional[UserModel]:
        try:
            stmt = select(UserModel).where(UserModel.id == user_id)
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()
            
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving user {user_id}: {str(e)}")
            raise RepositoryError("Failed to retrieve user", operation="get_by_id") from e
    
    async def _update_fields(self, user_id: str, operation: str, **values) -> Optional[User]:
        """Apply column updates to one user and commit. Returns None if the user is gone."""
        user_model = await self._get_model(user_id)
        if user_model is None:
            logger.warning(f"{operation}: user not found: {user_id}")
            return None
        
        try:
            for field, value in values.items():
                setattr(user_model, field, value)
            user_model.updated_at = datetime.now(timezone.utc)
            await self._session.commit()
            
            logger.debug(f"{operation} applied to user {user_id}")
            return self._model_to_domain(user_model)
            
        except IntegrityError as e:
            await self._session.rollback()
            logger.warning(f"{operation} conflict for user {user_id}")
            raise ConflictError(
                "User with email or username already exists",
                fields=[field for field in values if field in ("email", "username")]
            ) from e
            
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error during {operation} for user {user_id}: {str(e)}")
            raise RepositoryError("Failed to update user", operation=operation) from e
    
    def _domain_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar=user.avatar,
            avatar_public_id=user.avatar_public_id,
            cover_image=user.cover_image,
            cover_image_public_id=user.cover_image_public_id,
            password_hash=user.password_hash,
            refresh_token=user.refresh_token,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
    
    def _model_to_domain(self, user_model: UserModel) -> User:
        return User(
            id=str(user_model.id),
            username=user_model.username,
            email=user_model.email,
            full_name=user_model.full_name,
            avatar=user_model.avatar,
            avatar_public_id=user_model.avatar_public_id,
            cover_image=user_model.cover_image,
            cover_image_public_id=user_model.cover_image_public_id,
            password_hash=user_model.password_hash,
            refresh_token=user_model.refresh_token,
            created_at=user_model.created_at,
            updated_at=user_model.updated_at,
        )
