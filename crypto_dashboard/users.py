# crypto_dashboard/users.py
"""
User store backed by the SQL database.

Password writes are sequenced strictly: hash first, then persist, then
return the refreshed record. Callers never see a user whose stored hash
lags behind the password they just set.
"""
from __future__ import annotations

from typing import AbstractSet, Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .logging_setup import get_logger
from .models import Feedback, User, UserPreferences, utc_now
from .security import hash_password, verify_password

logger = get_logger("crypto_dashboard.users")

UPDATABLE_FIELDS = frozenset({"first_name", "last_name", "profile_img"})
# Admins may also move a user between plans and adjust the score
ADMIN_UPDATABLE_FIELDS = UPDATABLE_FIELDS | {"score", "account"}


class EmailAlreadyRegistered(Exception):
    pass


def get_user(session: Session, user_id: int) -> Optional[User]:
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email.strip().lower())).first()


def create_user(
    session: Session,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    profile_img: str = "",
) -> User:
    email = email.strip().lower()
    if get_user_by_email(session, email):
        raise EmailAlreadyRegistered(email)

    user = User(
        email=email,
        password_hash=hash_password(password),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        profile_img=profile_img or "",
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        session.rollback()
        raise EmailAlreadyRegistered(email)
    session.refresh(user)
    logger.info("USER_CREATED", extra={"user_id": user.id})
    return user


def authenticate(session: Session, email: str, password: str) -> Optional[User]:
    user = get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def update_user(
    session: Session,
    user: User,
    updates: Dict[str, Any],
    allowed: AbstractSet[str] = UPDATABLE_FIELDS,
) -> User:
    """
    Apply profile updates. A new ``password`` is hashed before anything is
    written, so the commit below is the single point where the change lands.
    Keys outside ``allowed`` (and ``None`` values) are ignored.
    """
    for key, value in updates.items():
        if key in allowed and value is not None:
            setattr(user, key, value)

    password = updates.get("password")
    if password:
        user.password_hash = hash_password(password)

    user.updated_at = utc_now()
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("USER_UPDATED", extra={"user_id": user.id, "password_changed": bool(password)})
    return user


def list_users(session: Session) -> List[User]:
    return list(session.exec(select(User).order_by(User.id)).all())


def is_admin(user: User) -> bool:
    return bool(user.is_admin) or user.role == "admin"


def delete_user(session: Session, user: User) -> None:
    """Remove the user together with their preferences and feedback."""
    user_id = user.id
    for model in (UserPreferences, Feedback):
        for row in session.exec(select(model).where(model.user_id == user_id)).all():
            session.delete(row)
    session.delete(user)
    session.commit()
    logger.info("USER_DELETED", extra={"user_id": user_id})


def ensure_admin(session: Session, email: str, password: str) -> User:
    """Create the bootstrap admin account, or promote the existing account with that email."""
    user = get_user_by_email(session, email)
    if user is None:
        user = create_user(session, email, password, "Admin", "User")
    if not is_admin(user):
        user.is_admin = True
        user.role = "admin"
        session.add(user)
        session.commit()
        session.refresh(user)
        logger.info("USER_PROMOTED", extra={"user_id": user.id})
    return user


def public_user(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": f"{user.first_name} {user.last_name}".strip(),
        "firstName": user.first_name,
        "lastName": user.last_name,
        "profileImg": user.profile_img,
        "account": user.account,
        "score": user.score,
        "isAdmin": user.is_admin,
        "role": user.role,
    }


def user_summary(user: User) -> Dict[str, Any]:
    """The slice of the profile embedded in the dashboard response."""
    return {
        "id": user.id,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "score": user.score,
        "account": user.account,
    }
