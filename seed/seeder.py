"""Startup seeding of menu applications, roles and the admin account.

Every step looks the row up by its natural key first, so running the seeder
on every boot is safe.
"""
from __future__ import annotations
from typing import Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from application.models import Application
from application.service import get_application_by_name
from auth.utils.auth_utils import get_password_hash
from core.config_loader import settings
from role.models import Role, RoleApplicationPermission, UserRoleMapping
from user.models import User

ADMIN_ROLE = "Administrator"
ROLES = (ADMIN_ROLE, "Manager", "User")

# (name, url, area, children)
APPLICATIONS = (
    ("Setup", "/setup", "Setup", (
        ("Company Details", "/setup/company", "Setup"),
        ("Users", "/setup/users", "Setup"),
        ("Roles", "/setup/roles", "Setup"),
        ("Locations", "/setup/locations", "Setup"),
    )),
    ("Equipment", "/equipment", "Equipment", ()),
    ("Certification", "/certification", "Certification", (
        ("Certificates", "/certification/certificates", "Certification"),
        ("Expiring Certificates", "/certification/expiring", "Certification"),
    )),
    ("Audit", "/audit", "Audit", ()),
)


def _get_or_create_application(db: Session, name: str, url: str, area: str, parent_id: Optional[int]) -> Application:
    app = get_application_by_name(db, name)
    if app is not None:
        return app
    app = Application(
        name=name,
        url=url,
        area_name=area,
        parent_id=parent_id,
        icon_image_url=f"/assets/{url.strip('/').replace('/', '-')}-icon.png",
    )
    db.add(app)
    db.flush()
    logger.info("Created application {} (id={})", name, app.id)
    return app


def seed_applications(db: Session) -> list[Application]:
    seeded: list[Application] = []
    for name, url, area, children in APPLICATIONS:
        parent = _get_or_create_application(db, name, url, area, None)
        seeded.append(parent)
        for child_name, child_url, child_area in children:
            seeded.append(_get_or_create_application(db, child_name, child_url, child_area, parent.id))
    return seeded


def seed_roles(db: Session) -> dict[str, Role]:
    roles: dict[str, Role] = {}
    for name in ROLES:
        role = db.scalars(select(Role).where(Role.name == name)).first()
        if role is None:
            role = Role(name=name)
            db.add(role)
            db.flush()
            logger.info("Created role {}", name)
        roles[name] = role
    return roles


def seed_admin_permissions(db: Session, admin: Role, applications: list[Application]) -> None:
    granted = set(db.scalars(
        select(RoleApplicationPermission.application_id).where(RoleApplicationPermission.role_id == admin.id)
    ))
    for app in applications:
        if app.id not in granted:
            db.add(RoleApplicationPermission(role_id=admin.id, application_id=app.id))
            logger.info("Granted {} -> {}", admin.name, app.name)


def seed_admin_user(db: Session, admin: Role) -> User:
    email = settings.ADMIN_EMAIL.lower()
    user = db.scalars(select(User).where(User.email == email)).first()
    if user is None:
        user = User(
            email=email,
            password_hash=get_password_hash(settings.ADMIN_PASSWORD),
            first_name="System",
            last_name="Administrator",
            is_active=True,
        )
        db.add(user)
        db.flush()
        logger.info("Created admin user {}", email)
    mapped = db.scalars(select(UserRoleMapping).where(
        UserRoleMapping.user_id == user.id, UserRoleMapping.role_id == admin.id
    )).first()
    if mapped is None:
        db.add(UserRoleMapping(user_id=user.id, role_id=admin.id))
        logger.info("Assigned {} role to {}", admin.name, email)
    return user


def run_seed(db: Session) -> None:
    logger.info("Starting application and role seeding")
    try:
        applications = seed_applications(db)
        roles = seed_roles(db)
        seed_admin_permissions(db, roles[ADMIN_ROLE], applications)
        seed_admin_user(db, roles[ADMIN_ROLE])
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    logger.info("Seeding completed")
