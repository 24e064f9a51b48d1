from typing import List, Optional
from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from application.models import Application
from core.exceptions import ConflictError, NotFoundError
from .models import Role, RoleApplicationPermission

def get_roles(db: Session) -> List[Role]:
    return list(db.scalars(select(Role).order_by(Role.name.asc())))

def get_role(db: Session, role_id: int) -> Optional[Role]:
    return db.get(Role, role_id)

def get_role_by_name(db: Session, name: str) -> Optional[Role]:
    stmt = select(Role).where(func.lower(Role.name) == name.lower())
    return db.scalars(stmt).first()

def create_role(db: Session, name: str) -> Role:
    if get_role_by_name(db, name) is not None:
        raise ConflictError(f"Role {name} already exists")
    role = Role(name=name)
    db.add(role)
    db.commit()
    db.refresh(role)
    return role

def get_role_applications(db: Session, role_id: int) -> List[Application]:
    stmt = (
        select(Application)
        .join(RoleApplicationPermission, RoleApplicationPermission.application_id == Application.id)
        .where(RoleApplicationPermission.role_id == role_id)
        .order_by(Application.id.asc())
    )
    return list(db.scalars(stmt))

def _require(db: Session, role_id: int, application_ids: list[int]) -> None:
    if get_role(db, role_id) is None:
        raise NotFoundError(f"Role with ID {role_id} not found")
    if application_ids:
        found = set(db.scalars(select(Application.id).where(Application.id.in_(application_ids))))
        missing = sorted(set(application_ids) - found)
        if missing:
            raise NotFoundError(f"Application(s) not found: {missing}")

def set_role_applications(db: Session, role_id: int, application_ids: list[int]) -> List[Application]:
    """Replace every permission of the role with ``application_ids``."""
    _require(db, role_id, application_ids)
    db.execute(delete(RoleApplicationPermission).where(RoleApplicationPermission.role_id == role_id))
    for app_id in dict.fromkeys(application_ids):
        db.add(RoleApplicationPermission(role_id=role_id, application_id=app_id))
    db.commit()
    logger.info("Role {} now grants applications {}", role_id, sorted(set(application_ids)))
    return get_role_applications(db, role_id)

def grant_application(db: Session, role_id: int, application_id: int) -> None:
    _require(db, role_id, [application_id])
    exists = db.scalars(select(RoleApplicationPermission).where(
        RoleApplicationPermission.role_id == role_id,
        RoleApplicationPermission.application_id == application_id,
    )).first()
    if exists is None:
        db.add(RoleApplicationPermission(role_id=role_id, application_id=application_id))
        db.commit()

def revoke_application(db: Session, role_id: int, application_id: int) -> None:
    db.execute(delete(RoleApplicationPermission).where(
        RoleApplicationPermission.role_id == role_id,
        RoleApplicationPermission.application_id == application_id,
    ))
    db.commit()
