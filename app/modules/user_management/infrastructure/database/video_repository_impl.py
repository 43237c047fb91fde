# 📄 File: app/modules/user_management/infrastructure/database/video_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Looks up videos from the database together with a small card about who uploaded each one.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of VideoRepository. Resolves a batch of ids with one
# outer join against users so missing owners come back as None.
# 🔗 Dependencies:
# SQLAlchemy, app.shared.infrastructure.database.session, logging
# 🔄 Connected Modules / Calls From:
# user_service.py (watch history), presentation dependencies, repository tests

import logging
from typing import Dict, Iterable

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.domain.models.video import Video, VideoOwner
from app.modules.user_management.domain.repositories.video_repository import VideoRepository
from app.modules.user_management.infrastructure.database.models import UserModel, VideoModel
from app.shared.core.exceptions import RepositoryError
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class VideoRepositoryImpl(VideoRepository):
    """SQLAlchemy implementation of the VideoRepository interface."""

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, video: Video) -> Video:
        try:
            self._session.add(VideoModel(
                id=video.id,
                video_file=video.video_file,
                thumbnail=video.thumbnail,
                title=video.title,
                description=video.description,
                duration=video.duration,
                views=video.views,
                is_published=video.is_published,
                owner_id=video.owner_id,
                created_at=video.created_at,
                updated_at=video.updated_at,
            ))
            await self._session.commit()
            return video

        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error creating video: {str(e)}")
            raise RepositoryError("Failed to create video", operation="create") from e

    async def get_by_ids_with_owners(self, video_ids: Iterable[str]) -> Dict[str, Video]:
        ids = list(dict.fromkeys(video_ids))
        if not ids:
            return {}

        try:
            stmt = (
                select(VideoModel, UserModel)
                .outerjoin(UserModel, UserModel.id == VideoModel.owner_id)
                .where(VideoModel.id.in_(ids))
            )
            result = await self._session.execute(stmt)
            rows = result.all()

        except SQLAlchemyError as e:
            logger.error(f"Database error resolving videos: {str(e)}")
            raise RepositoryError("Failed to read videos", operation="get_by_ids") from e

        videos = {}
        for video_model, owner_model in rows:
            video = self._model_to_domain(video_model, owner_model)
            videos[video.id] = video
        logger.debug(f"Resolved {len(videos)} of {len(ids)} videos")
        return videos

    @staticmethod
    def _model_to_domain(video_model: VideoModel, owner_model) -> Video:
        owner = None
        if owner_model is not None:
            owner = VideoOwner(
                id=str(owner_model.id),
                full_name=owner_model.full_name,
                username=owner_model.username,
                avatar=owner_model.avatar,
            )
        return Video(
            id=str(video_model.id),
            video_file=video_model.video_file,
            thumbnail=video_model.thumbnail,
            title=video_model.title,
            description=video_model.description,
            duration=video_model.duration,
            views=video_model.views,
            is_published=video_model.is_published,
            owner_id=str(video_model.owner_id),
            owner=owner,
            created_at=video_model.created_at,
            updated_at=video_model.updated_at,
        )
