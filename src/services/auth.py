"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import Settings
from src.exceptions import DuplicateEmail, NotAuthenticated, PermissionDenied
from src.models.enums import UserRole
from src.models.user import User
from src.schemas.auth import ProfileUpdate

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, settings: Settings) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict | None:
    """Decode and validate a JWT token. Expired or tampered tokens yield None."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def authenticate(db: Session, token: str | None, settings: Settings) -> User:
    """Resolve the caller behind a bearer token.

    Raises NotAuthenticated when the token is absent, malformed or expired, or
    when the referenced user no longer exists or has been deactivated.
    """
    if not token:
        raise NotAuthenticated("Access token required")

    payload = decode_access_token(token, settings)
    if payload is None:
        raise NotAuthenticated("Invalid authentication credentials")

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise NotAuthenticated("Invalid authentication credentials") from None

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotAuthenticated("User not found")
    if not user.is_active:
        raise NotAuthenticated("Account is deactivated")
    return user


def authenticate_optional(db: Session, token: str | None, settings: Settings) -> User | None:
    """Same as authenticate, but an absent or bad credential means anonymous."""
    try:
        return authenticate(db, token, settings)
    except NotAuthenticated:
        return None


def require_role(role: UserRole, required: UserRole) -> None:
    if role != required:
        raise PermissionDenied("Access restricted to administrators")


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email.lower()).first()


def create_user(
    db: Session,
    email: str,
    password: str,
    name: str,
    role: UserRole = UserRole.USER,
) -> User:
    """Create a new user."""
    if get_user_by_email(db, email):
        raise DuplicateEmail(email)

    user = User(
        email=email.lower(),
        password_hash=get_password_hash(password),
        name=name,
        role=role,
        is_active=True,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail(email) from None
    db.refresh(user)
    logger.info(f"Registered user {user.id} with role {user.role.value}")
    return user


def update_profile(db: Session, user: User, changes: ProfileUpdate) -> User:
    """Apply the supplied profile fields."""
    if changes.email is not None and changes.email.lower() != user.email:
        if get_user_by_email(db, changes.email):
            raise DuplicateEmail(changes.email)
        user.email = changes.email.lower()
    if changes.name is not None:
        user.name = changes.name

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail(changes.email) from None
    db.refresh(user)
    return user
