from typing import List, Optional
from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from auth.utils.auth_utils import get_password_hash
from core.exceptions import ConflictError, NotFoundError
from role.models import Role, UserRoleMapping
from user.models import User
from user.schemas import UserCreate, UserUpdate


def _active():
    return select(User).where(User.deleted_at.is_(None))


def get_users(db: Session) -> List[User]:
    return list(db.scalars(_active().order_by(User.id.asc())))


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.scalars(_active().where(User.id == user_id)).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalars(_active().where(User.email == email.strip().lower())).first()


def _email_taken(db: Session, email: str, *, exclude_id: Optional[int] = None) -> bool:
    # soft-deleted rows still hold the unique email
    stmt = select(User.id).where(User.email == email)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    return db.scalar(stmt) is not None


def _resolve_roles(db: Session, role_names: list[str]) -> List[Role]:
    wanted = {n.strip().lower() for n in role_names if n and n.strip()}
    if not wanted:
        return []
    roles = list(db.scalars(select(Role).where(func.lower(Role.name).in_(sorted(wanted))).order_by(Role.id)))
    missing = wanted - {r.name.lower() for r in roles}
    if missing:
        raise NotFoundError(f"Role(s) not found: {', '.join(sorted(missing))}")
    return roles


def _replace_roles(db: Session, user_id: int, roles: List[Role]) -> None:
    db.execute(delete(UserRoleMapping).where(UserRoleMapping.user_id == user_id))
    for role in roles:
        db.add(UserRoleMapping(user_id=user_id, role_id=role.id))


def create_user(db: Session, user: UserCreate, *, created_by: Optional[int] = None) -> User:
    email = str(user.email).lower()
    if _email_taken(db, email):
        raise ConflictError("User with this email already exists")
    roles = _resolve_roles(db, user.roles or [])

    db_user = User(
        email=email,
        password_hash=get_password_hash(user.password),
        first_name=user.first_name,
        middle_name=user.middle_name,
        last_name=user.last_name,
        phone_number=user.phone_number,
        address=user.address,
        is_active=True,
        created_by=created_by,
        updated_by=created_by,
    )
    db.add(db_user)
    db.flush()
    _replace_roles(db, db_user.id, roles)
    db.commit()
    db.refresh(db_user)
    logger.info("Created user {} with roles {}", db_user.id, [r.name for r in roles])
    return db_user


def update_user(db: Session, user_id: int, patch: UserUpdate, *, updated_by: Optional[int] = None) -> Optional[User]:
    db_user = get_user(db, user_id)
    if not db_user:
        return None
    data = patch.model_dump(exclude_unset=True)
    role_names = data.pop("roles", None)
    roles = _resolve_roles(db, role_names) if role_names is not None else None

    if "email" in data and data["email"] is not None:
        data["email"] = str(data["email"]).lower()
        if _email_taken(db, data["email"], exclude_id=user_id):
            raise ConflictError("User with this email already exists")
    password = data.pop("password", None)
    if password:
        db_user.password_hash = get_password_hash(password)
    for k, v in data.items():
        if v is not None:
            setattr(db_user, k, v)
    db_user.updated_by = updated_by
    if roles is not None:
        _replace_roles(db, user_id, roles)
    db.commit()
    db.refresh(db_user)
    return db_user


def delete_user(db: Session, user_id: int, *, deleted_by: Optional[int] = None) -> bool:
    db_user = get_user(db, user_id)
    if not db_user:
        return False
    db_user.soft_delete(by=deleted_by)
    db.commit()
    logger.info("Soft-deleted user {} by user {}", user_id, deleted_by)
    return True


def assign_roles_to_user(db: Session, user_id: int, role_names: list[str]) -> List[Role]:
    """Replace the user's roles with ``role_names`` (case-insensitive).

    Unknown names raise NotFoundError and leave the current mapping untouched.
    An empty list removes every role.
    """
    if get_user(db, user_id) is None:
        raise NotFoundError("User not found")
    roles = _resolve_roles(db, role_names)
    _replace_roles(db, user_id, roles)
    db.commit()
    logger.info("Assigned roles {} to user {}", [r.name for r in roles], user_id)
    return roles


def get_profile(db: Session, user_id: int) -> User:
    db_user = get_user(db, user_id)
    if db_user is None:
        raise NotFoundError("User not found")
    return db_user
