"""User directory: registration, profile updates, identity resolution."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from core.auth.interface import AuthUser
from core.db.schemas.user import User
from core.db.store import Store
from core.errors import ConflictError, ErrorCode, ForbiddenError, NotFoundError
from core.models.user import DEFAULT_PROFILE_IMAGE, UserCreate, UserRead, UserUpdate
from core.services.authz import require_caller

logger = logging.getLogger(__name__)


def register_user(store: Store, payload: UserCreate) -> UserRead:
    with store.session() as session:
        if session.scalar(select(User.id).where(User.email == payload.email)) is not None:
            raise ConflictError(f"Email {payload.email} already registered", code=ErrorCode.EMAIL_TAKEN)
        user = User(
            email=payload.email,
            name=payload.name,
            phone=payload.phone,
            profile_image=payload.profile_image or DEFAULT_PROFILE_IMAGE,
            auth_subject=payload.auth_subject,
        )
        session.add(user)
        try:
            session.commit()
        except IntegrityError as e:
            raise ConflictError(f"Email {payload.email} already registered", code=ErrorCode.EMAIL_TAKEN) from e
        logger.info("Registered user %s", user.id)
        return UserRead.model_validate(user)


def get_user(store: Store, user_id: int) -> UserRead:
    with store.session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found", code=ErrorCode.USER_NOT_FOUND)
        return UserRead.model_validate(user)


def update_profile(store: Store, user_id: int, caller_id: int | None, payload: UserUpdate) -> UserRead:
    caller = require_caller(caller_id)
    if caller != user_id:
        raise ForbiddenError(f"User {caller} cannot edit profile of user {user_id}")
    with store.session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found", code=ErrorCode.USER_NOT_FOUND)
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(user, key, value)
        session.commit()
        return UserRead.model_validate(user)


def delete_user(store: Store, user_id: int, caller_id: int | None) -> None:
    """Remove a user; trips, requests, conversations and messages cascade."""
    caller = require_caller(caller_id)
    if caller != user_id:
        raise ForbiddenError(f"User {caller} cannot delete user {user_id}")
    with store.session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found", code=ErrorCode.USER_NOT_FOUND)
        session.delete(user)
        session.commit()
        logger.info("Deleted user %s", user_id)


def resolve_caller(store: Store, auth_user: AuthUser) -> int:
    """Map a verified identity to a directory user id, provisioning on first sight.

    Users are matched by identity-provider subject first, then by email so a
    pre-registered account gets linked to its provider identity.
    """
    with store.session() as session:
        user = session.scalar(select(User).where(User.auth_subject == auth_user.user_id))
        if user is not None:
            return user.id

        user = session.scalar(select(User).where(User.email == auth_user.email)) if auth_user.email else None
        if user is not None:
            user.auth_subject = auth_user.user_id
        else:
            user = User(
                email=auth_user.email or f"{auth_user.user_id}@users.invalid",
                name=auth_user.name or auth_user.email or auth_user.user_id,
                phone=auth_user.phone,
                profile_image=auth_user.image_url or DEFAULT_PROFILE_IMAGE,
                auth_subject=auth_user.user_id,
            )
            session.add(user)
        try:
            session.commit()
        except IntegrityError:
            # Another request provisioned the same identity first.
            session.rollback()
            existing = session.scalar(select(User.id).where(User.auth_subject == auth_user.user_id))
            if existing is None:
                raise
            return existing
        logger.info("Resolved identity %s to user %s", auth_user.user_id, user.id)
        return user.id
