"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.user import User
from src.services.exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    ValidationError,
)

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PASSWORD_MIN_LENGTH = 6
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30

INVALID_CREDENTIALS = "Invalid credentials"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: str, issued_at: datetime | None = None) -> str:
    """Create a JWT access token that expires after the configured lifetime."""
    issued_at = issued_at or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token.

    Returns None when the token is malformed, badly signed or expired.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def normalize_email(email: str) -> str:
    """Normalize an email address for storage and lookup."""
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


class IdentityService:
    """Registration, login and token authentication."""

    def __init__(self, db: Session):
        self.db = db

    def register(self, email: str | None, username: str | None, password: str | None) -> tuple[User, str]:
        """Create a new user and issue a token for it.

        Raises:
            ValidationError: a field is missing, the username has the wrong
                length or the password is too short.
            ConflictError: the email or username is already taken.
        """
        for field, value in (("email", email), ("username", username)):
            if not value or not value.strip():
                raise ValidationError("Email, username and password are required", field=field)
        if not password:
            raise ValidationError("Email, username and password are required", field="password")

        email = normalize_email(email)
        username = username.strip()

        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            raise ValidationError(
                f"Username must be between {USERNAME_MIN_LENGTH} and "
                f"{USERNAME_MAX_LENGTH} characters",
                field="username",
            )
        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
                field="password",
            )

        existing_user = (
            self.db.query(User).filter(or_(User.email == email, User.username == username)).first()
        )
        if existing_user:
            if existing_user.email == email:
                raise ConflictError("Email already registered")
            raise ConflictError("Username already taken")

        user = User(email=email, username=username, password_hash=get_password_hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            self.db.rollback()
            raise ConflictError("Email or username already registered") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise InternalError("Could not create user") from e
        self.db.refresh(user)

        logger.info(f"Registered user {user.id} ({user.username})")
        return user, create_access_token(user.id)

    def login(self, email: str | None, password: str | None) -> tuple[User, str]:
        """Verify credentials and issue a token.

        An unknown email and a wrong password fail with the same error.
        """
        if not email or not password:
            raise ValidationError(
                "Email and password are required",
                field="email" if not email else "password",
            )

        user = get_user_by_email(self.db, email)
        if user is None:
            pwd_context.dummy_verify()
            logger.info("Failed login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not verify_password(password, user.password_hash):
            logger.info(f"Failed login attempt for user {user.id}")
            raise AuthenticationError(INVALID_CREDENTIALS)

        return user, create_access_token(user.id)

    def authenticate(self, token: str | None) -> User:
        """Resolve a bearer token to an existing user.

        Pure check: nothing is refreshed or written.
        """
        if not token:
            raise AuthenticationError("Authentication required")

        payload = decode_access_token(token)
        if payload is None:
            raise AuthenticationError("Invalid or expired token")

        user_id = payload.get("sub")
        if not user_id:
            raise AuthenticationError("Invalid or expired token")

        user = self.db.get(User, user_id)
        if user is None:
            raise AuthenticationError("User not found")

        return user
