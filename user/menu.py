from __future__ import annotations
from collections import defaultdict
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from application.models import Application
from application.schemas import MenuItem
from core.exceptions import NotFoundError
from role.models import RoleApplicationPermission, UserRoleMapping
from user import service as user_service

# top level, children, grandchildren
MENU_DEPTH = 3


def get_user_menu(db: Session, user_id: int) -> List[MenuItem]:
    """
    Navigation menu visible to a user through their roles.
    - NotFoundError if the user does not exist or is soft-deleted
    - [] if the user holds no role, or no role grants a top-level application
    - a child is shown only when its parent is shown and a role grants it too
    - every level is ordered by application id
    """
    if user_service.get_user(db, user_id) is None:
        raise NotFoundError("User not found")

    role_ids = list(db.scalars(select(UserRoleMapping.role_id).where(UserRoleMapping.user_id == user_id)))
    if not role_ids:
        return []

    stmt = (
        select(Application)
        .join(RoleApplicationPermission, RoleApplicationPermission.application_id == Application.id)
        .where(RoleApplicationPermission.role_id.in_(role_ids))
        .order_by(Application.id.asc())
    )
    permitted = list(db.scalars(stmt).unique())

    by_parent: dict[int | None, list[Application]] = defaultdict(list)
    for app in permitted:
        by_parent[app.parent_id].append(app)

    def _item(app: Application, depth: int) -> MenuItem:
        node = MenuItem.model_validate(app)
        if depth < MENU_DEPTH:
            node.children = [_item(c, depth + 1) for c in by_parent.get(app.id, [])]
        return node

    return [_item(app, 1) for app in by_parent.get(None, [])]
