"""Registration, login and session resolution.

Sessions are opaque random tokens stored server-side. Every request that needs
an identity resolves its cookie to a :class:`Principal`, which is then passed
explicitly into the service operations that enforce authorization.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookclub.core.errors import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from bookclub.core.security import (
    DUMMY_DIGEST,
    generate_session_token,
    hash_password,
    needs_rehash,
    verify_password,
)
from bookclub.core.settings import settings
from bookclub.db.time import utcnow
from bookclub.models import User, UserSession
from bookclub.models.user import ROLE_ADMIN, ROLE_MEMBER

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
USERNAME_MAX_LENGTH = 64


@dataclass(frozen=True)
class Principal:
    """Verified identity of the caller for the current request."""

    user_id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def require_admin(self) -> None:
        """Raise :class:`ForbiddenError` unless the caller is an admin."""
        if not self.is_admin:
            logger.warning("Admin check failed for user %s", self.user_id)
            raise ForbiddenError("Admin access required")

    def require_self_or_admin(self, user_id: int) -> None:
        """Raise :class:`ForbiddenError` when acting for another user without admin rights."""
        if user_id != self.user_id and not self.is_admin:
            raise ForbiddenError("Cannot act on behalf of another user")

    @classmethod
    def from_user(cls, user: User) -> Principal:
        return cls(user_id=user.id, username=user.username, role=user.role)


def _open_session(db: Session, user: User) -> str:
    token = generate_session_token()
    db.add(
        UserSession(
            user_id=user.id,
            session_token=token,
            expires_at=utcnow() + timedelta(days=settings.session_ttl_days),
        )
    )
    return token


def normalize_username(username: str | None) -> str:
    """Return the canonical form of a username as stored and looked up."""
    return (username or "").strip()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Return a user by exact username."""
    return db.query(User).filter(User.username == username).first()


def register(db: Session, username: str | None, password: str | None) -> tuple[User, str]:
    """Create a member account and open a session for it.

    Args:
        db: Database session
        username: Requested unique username
        password: Plain-text password, at least ``PASSWORD_MIN_LENGTH`` characters

    Returns:
        The new user and its session token.

    Raises:
        ValidationError: If a field is missing or the password is too short.
        ConflictError: If the username is already taken.
    """
    username = normalize_username(username)
    if not username or not password:
        raise ValidationError("Username and password are required")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
    if len(password) < settings.password_min_length:
        raise ValidationError(
            f"Password must be at least {settings.password_min_length} characters"
        )

    if get_user_by_username(db, username) is not None:
        raise ConflictError("Username already exists")

    user = User(username=username, password_digest=hash_password(password), role=ROLE_MEMBER)
    db.add(user)
    try:
        db.flush()
        token = _open_session(db, user)
        db.commit()
    except IntegrityError as err:
        # Lost a race with a concurrent registration of the same name.
        db.rollback()
        raise ConflictError("Username already exists") from err
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user, token


def login(db: Session, username: str | None, password: str | None) -> tuple[User, str]:
    """Verify credentials and open a new session.

    Unknown usernames and wrong passwords fail with the same error.
    """
    username = normalize_username(username)
    if not username or not password:
        raise AuthError(INVALID_CREDENTIALS)

    user = get_user_by_username(db, username)
    if user is None:
        verify_password(password, DUMMY_DIGEST)
        logger.warning("Failed login attempt")
        raise AuthError(INVALID_CREDENTIALS)
    if not verify_password(password, user.password_digest):
        logger.warning("Failed login attempt")
        raise AuthError(INVALID_CREDENTIALS)

    if needs_rehash(user.password_digest):
        user.password_digest = hash_password(password)
    token = _open_session(db, user)
    db.commit()
    return user, token


def logout(db: Session, token: str | None) -> None:
    """Delete the session for ``token``; unknown tokens are ignored."""
    if not token:
        return
    db.execute(delete(UserSession).where(UserSession.session_token == token))
    db.commit()


def resolve_session(db: Session, token: str | None) -> Principal | None:
    """Return the principal owning an unexpired session, or None."""
    if not token:
        return None
    row = (
        db.query(User)
        .join(UserSession, UserSession.user_id == User.id)
        .filter(
            UserSession.session_token == token,
            UserSession.expires_at > utcnow(),
        )
        .first()
    )
    if row is None:
        return None
    return Principal.from_user(row)


def purge_expired_sessions(db: Session) -> int:
    """Delete all expired sessions and return how many were removed."""
    result = db.execute(delete(UserSession).where(UserSession.expires_at <= utcnow()))
    db.commit()
    return result.rowcount or 0


def set_role(db: Session, username: str, role: str) -> User:
    """Assign ``role`` to the named user; used by operator scripts."""
    if role not in (ROLE_MEMBER, ROLE_ADMIN):
        raise ValidationError(f"Unknown role: {role}")
    user = get_user_by_username(db, normalize_username(username))
    if user is None:
        raise NotFoundError("User not found")
    user.role = role
    db.commit()
    logger.info("Set role of user %s to %s", user.id, role)
    return user


def list_users(db: Session) -> list[User]:
    """Return all users ordered by username."""
    return db.query(User).order_by(User.username.asc()).all()
