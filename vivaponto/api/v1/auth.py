"""
Authentication endpoints
"""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from vivaponto.core.deps import get_db, require_admin
from vivaponto.core.security import create_access_token
from vivaponto.models.user import User
from vivaponto.schemas.auth import LoginRequest, TokenResponse
from vivaponto.schemas.user import UserCreate, UserOut
from vivaponto.services.audit_service import log_audit
from vivaponto.services.user_service import authenticate, register_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return JWT token

    Validates email and password. Returns access token and the user profile.
    """
    user = authenticate(db, login_data.email, login_data.password)

    # JWT 'sub' claim must be a string
    token_data = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
    }
    access_token = create_access_token(data=token_data)

    log_audit(
        db=db,
        actor_id=user.id,
        action="AUTH_LOGIN_SUCCESS",
        entity_type="auth",
        entity_id=None,
        meta={"email": user.email, "role": user.role}
    )
    logger.info("login: user_id=%s role=%s", user.id, user.role)

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserOut.model_validate(user),
    )


@router.post("/register", response_model=UserOut, status_code=201)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Register a new user (admin only)"""
    return register_user(db, user_data, actor=current_user)
