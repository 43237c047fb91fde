# 📄 File: app/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation): 
# Defines the contract for how to save, find and update VideoTube accounts without specifying the actual database technology
# 🧪 Purpose (Technical Summary): 
# Repository interface defining data access operations for User entities following Repository pattern and dependency inversion principle
# 🔗 Dependencies: 
# Domain models (User), typing, abc
# 🔄 Connected Modules / Calls From: 
# Domain services, infrastructure implementations, presentation dependencies, test fakes

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.user import User


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.
    
    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return domain entities (User), not database models
    - Every write is committed on its own; there is no multi-step transaction
    - Username and email lookups use the normalized (lower-cased) values
    """
    
    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create a new user.
        
        Args:
            user: User entity to create
            
        Returns:
            Created User entity
            
        Raises:
            ConflictError: If username or email is already taken
            RepositoryError: If database operation fails
        """
        pass
    
    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID, or None."""
        pass
    
    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by normalized username, or None."""
        pass
    
    @abstractmethod
    async def find_by_username_or_email(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None
    ) -> Optional[User]:
        """
        Get the first user matching either identifier.
        
        Args:
            username: Normalized username, ignored when None
            email: Normalized email, ignored when None
            
        Returns:
            User entity if found, None otherwise
        """
        pass
    
    @abstractmethod
    async def email_taken_by_other(self, email: str, user_id: str) -> bool:
        """Whether an account other than user_id already uses this email."""
        pass
    
    @abstractmethod
    async def set_refresh_token(self, user_id: str, refresh_token: str) -> None:
        """Store the single active refresh token for a user."""
        pass
    
    @abstractmethod
    async def clear_refresh_token(self, user_id: str) -> None:
        """Unset the stored refresh token."""
        pass
    
    @abstractmethod
    async def update_password_hash(self, user_id: str, password_hash: str) -> None:
        """Replace the stored password hash."""
        pass
    
    @abstractmethod
    async def update_account_details(
        self,
        user_id: str,
        full_name: str,
        email: str
    ) -> Optional[User]:
        """
        Update display name and email.
        
        Returns:
            Updated user, or None if the user no longer exists
            
        Raises:
            ConflictError: If the email is taken by another account
        """
        pass
    
    @abstractmethod
    async def update_avatar(self, user_id: str, url: str, public_id: str) -> Optional[User]:
        """Replace avatar URL and provider identifier. Returns updated user or None."""
        pass
    
    @abstractmethod
    async def update_cover_image(self, user_id: str, url: str, public_id: str) -> Optional[User]:
        """Replace cover image URL and provider identifier. Returns updated user or None."""
        pass
    
    @abstractmethod
    async def add_to_watch_history(self, user_id: str, video_id: str) -> None:
        """Append a video id to the end of the user's watch history."""
        pass
    
    @abstractmethod
    async def get_watch_history_ids(self, user_id: str) -> List[str]:
        """
        Get the ordered list of watched video ids.
        
        Order is history order and duplicates are kept.
        """
        pass
