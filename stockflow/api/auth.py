"""
Authentication API - Signup, Login, JWT Token, Password Management
"""
import logging
import re
import secrets
import smtplib
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime, timedelta, timezone
from uuid import UUID
from jose import JWTError, jwt
import bcrypt

from stockflow.core import get_db, Settings
from stockflow.models import AppUser
from stockflow.services.mail_service import MailService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# ============== Configuration ==============

ALGORITHM = "HS256"

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])")

# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


# ============== Schemas ==============

def _normalize_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _check_password(value: str) -> str:
    if not PASSWORD_PATTERN.match(value):
        raise ValueError("Password must contain uppercase, lowercase, number, and special character")
    return value


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password(value)


class Token(BaseModel):
    access_token: str
    token_type: str
    user: dict


class UserInfo(BaseModel):
    id: UUID
    email: str
    name: Optional[str]
    role: str
    is_active: bool

    class Config:
        from_attributes = True


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8)

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password(value)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)


class ResetPasswordRequest(BaseModel):
    email: EmailStr
    otp: str = Field(..., pattern=r"^\d{6}$")
    password: str = Field(..., min_length=8)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password(value)


# ============== Helper Functions ==============

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash using bcrypt"""
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def generate_otp() -> str:
    return f"{secrets.randbelow(1_000_000):06d}"


def authenticate_user(db: Session, email: str, password: str) -> Optional[AppUser]:
    """Authenticate user by email and password"""
    user = db.query(AppUser).filter(AppUser.email == email.strip().lower()).first()
    if not user or not user.hashed_password:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def user_payload(user: AppUser) -> dict:
    return {
        "id": str(user.id),
        "email": user.email,
        "name": user.name,
        "role": user.role,
    }


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> Optional[AppUser]:
    """Get current user from JWT token"""
    if not token:
        return None

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        user_id = UUID(payload.get("sub", ""))
    except (JWTError, ValueError, TypeError):
        return None

    return db.query(AppUser).filter(AppUser.id == user_id).first()


async def get_current_active_user(
    current_user: Optional[AppUser] = Depends(get_current_user)
) -> AppUser:
    """Require authenticated and active user"""
    if not current_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive"
        )
    return current_user


async def require_admin(
    current_user: AppUser = Depends(get_current_active_user)
) -> AppUser:
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user


# ============== API Endpoints ==============

@router.post("/signup", response_model=UserInfo, status_code=status.HTTP_201_CREATED)
async def signup(data: SignupRequest, db: Session = Depends(get_db)):
    """Register a staff account"""
    if db.query(AppUser).filter(AppUser.email == data.email).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User with this email already exists")

    user = AppUser(
        email=data.email,
        name=data.name,
        hashed_password=get_password_hash(data.password),
        role="staff",
        is_active=True
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"New user signed up: {user.email}")
    return user


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """Login with email (as username) and password to get JWT token"""
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        logger.warning(f"Failed login for {form_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled"
        )

    access_token = create_access_token(data={"sub": str(user.id), "email": user.email}, settings=settings)
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": user_payload(user)
    }


@router.get("/me", response_model=UserInfo)
async def get_me(current_user: AppUser = Depends(get_current_active_user)):
    return current_user


@router.post("/password")
async def change_password(
    data: PasswordChange,
    current_user: AppUser = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Change own password"""
    if not current_user.hashed_password or not verify_password(data.current_password, current_user.hashed_password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")

    current_user.hashed_password = get_password_hash(data.new_password)
    db.commit()
    return {"message": "Password changed successfully"}


@router.post("/forgot-password")
def forgot_password(
    data: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """
    Issue a 6-digit reset OTP and email it to the user.

    The response is the same whether or not the email is registered.
    """
    user = db.query(AppUser).filter(AppUser.email == data.email).first()
    if user:
        otp = generate_otp()
        user.reset_token = otp
        user.reset_token_expiry = datetime.now(timezone.utc) + timedelta(minutes=settings.OTP_EXPIRY_MINUTES)
        db.commit()

        try:
            MailService.send_reset_otp(settings, user.email, otp)
        except (smtplib.SMTPException, OSError):
            logger.exception(f"Failed to send reset OTP to {user.email}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to send OTP email. Please try again."
            )
        logger.info(f"Password reset OTP sent to {user.email}")

    return {"message": "If the email exists, an OTP has been sent"}


@router.post("/reset-password")
async def reset_password(data: ResetPasswordRequest, db: Session = Depends(get_db)):
    user = db.query(AppUser).filter(AppUser.email == data.email).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not user.reset_token or user.reset_token != data.otp:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid OTP")

    expiry = user.reset_token_expiry
    # SQLite hands back naive datetimes
    if expiry is not None and expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    if expiry is None or expiry < datetime.now(timezone.utc):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="OTP has expired. Please request a new one.")

    user.hashed_password = get_password_hash(data.password)
    user.reset_token = None
    user.reset_token_expiry = None
    db.commit()
    logger.info(f"Password reset for {user.email}")
    return {"message": "Password reset successfully"}
