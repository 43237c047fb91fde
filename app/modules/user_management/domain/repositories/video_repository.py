# 📄 File: app/modules/user_management/domain/repositories/video_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how we look up videos, together with who uploaded them
# 🧪 Purpose (Technical Summary):
# Repository interface for Video read access used by watch history resolution
# 🔗 Dependencies:
# Domain models (Video), abc, typing
# 🔄 Connected Modules / Calls From:
# user_service.py (watch history), infrastructure implementation, test fakes

from abc import ABC, abstractmethod
from typing import Dict, Iterable

from ..models.video import Video


class VideoRepository(ABC):
    """Repository interface for videos."""

    @abstractmethod
    async def create(self, video: Video) -> Video:
        pass

    @abstractmethod
    async def get_by_ids_with_owners(self, video_ids: Iterable[str]) -> Dict[str, Video]:
        """
        Resolve ids to videos with their owner projection attached.

        Unknown ids are absent from the result. A video whose owner no longer
        exists is returned with owner set to None.
        """
        pass
