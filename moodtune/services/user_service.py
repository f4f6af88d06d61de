# ============================================================================
# FILE: moodtune/services/user_service.py
# ============================================================================
from typing import Optional
from sqlalchemy.orm import Session
from moodtune.db.models.user import User
from moodtune.schemas.user import UserCreate
from moodtune.core.security import get_password_hash, verify_password
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Service layer for user operations"""
    
    def create_user(self, db: Session, user_data: UserCreate) -> User:
        """Create a new user account"""
        try:
            hashed_password = get_password_hash(user_data.password)
            user = User(
                email=user_data.email,
                hashed_password=hashed_password
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"User created: {user.id} <{user.email}>")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise
    
    def get_user(self, db: Session, user_id: int) -> Optional[User]:
        """Get user by id"""
        return db.get(User, user_id)
    
    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()

# Create singleton instance
user_service = UserService()
