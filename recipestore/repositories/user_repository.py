"""
User Repository - Data access layer for user accounts
"""

from typing import Optional
from sqlalchemy.orm import Session

from recipestore.repositories.base import BaseRepository
from recipestore.domain.models import User


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        return self.db.query(User).filter(User.email == email).first()
