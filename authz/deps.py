from fastapi import Depends, HTTPException
from auth.services.auth_service import get_current_active_user
from user.models import User

ADMIN_ROLE = "Administrator"

def require_admin(user: User = Depends(get_current_active_user)) -> None:
    if not any(name.lower() == ADMIN_ROLE.lower() for name in user.role_names):
        raise HTTPException(status_code=403, detail="Administrator role required")
