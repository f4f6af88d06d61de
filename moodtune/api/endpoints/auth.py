# ============================================================================
# FILE: moodtune/api/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from moodtune.db.session import get_db
from moodtune.schemas.user import UserCreate, UserLogin, AuthResponse
from moodtune.services.user_service import user_service
from moodtune.core.security import verify_password
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/signup", response_model=AuthResponse)
async def signup(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Register a new user account
    """
    try:
        existing_email = user_service.get_user_by_email(db, user_data.email)
    except SQLAlchemyError as e:
        logger.error(f"Signup lookup error: {e}")
        raise HTTPException(status_code=500, detail="Signup failed")
    if existing_email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )
    
    try:
        user = user_service.create_user(db, user_data)
    except Exception as e:
        logger.error(f"Signup error: {e}")
        raise HTTPException(status_code=500, detail="Signup failed")
    return {"user": user}

@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Login with email and password
    Returns the user's id and email
    """
    try:
        user = user_service.get_user_by_email(db, credentials.email)
    except SQLAlchemyError as e:
        logger.error(f"Login error: {e}")
        raise HTTPException(status_code=500, detail="Login failed")
    
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    if not verify_password(credentials.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")
    
    return {"user": user}
