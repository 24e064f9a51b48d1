from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin
from core.database import get_db
from core.exceptions import ConflictError, NotFoundError
from application.schemas import MenuItem
from role.schemas import RoleSchema
from user.models import User
from user.schemas import UserSchema, UserCreate, UserUpdate, UserRolesUpdate
from user import service, menu

user_router = APIRouter(
    prefix='/users',
    tags=['Users']
)

# Get all users
@user_router.get('', response_model=list[UserSchema])
def user_list(db: Session = Depends(get_db), _admin = Depends(require_admin)):
    return service.get_users(db)

# Get current user
@user_router.get('/me', response_model=UserSchema)
def user_me(db: Session = Depends(get_db), current_user: User = Depends(get_current_active_user)):
    try:
        return service.get_profile(db, current_user.id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")

# Navigation menu for the current user
@user_router.get('/menu', response_model=list[MenuItem])
def user_menu(db: Session = Depends(get_db), current_user: User = Depends(get_current_active_user)):
    try:
        return menu.get_user_menu(db, current_user.id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")

# Get user details
@user_router.get('/{user_id}', response_model=UserSchema)
def user_detail(user_id: int, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    db_user = service.get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user

# Create a user
@user_router.post('', response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def user_post(payload: UserCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_active_user), _admin = Depends(require_admin)):
    try:
        return service.create_user(db, payload, created_by=current_user.id)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="User with this email already exists")

# Update a user
@user_router.patch('/{user_id}', response_model=UserSchema)
def user_patch(user_id: int, payload: UserUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_active_user), _admin = Depends(require_admin)):
    try:
        db_user = service.update_user(db, user_id, payload, updated_by=current_user.id)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user

# Replace a user's roles
@user_router.put('/{user_id}/roles', response_model=list[RoleSchema])
def user_roles_put(user_id: int, payload: UserRolesUpdate, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    try:
        return service.assign_roles_to_user(db, user_id, payload.roles)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

# Delete a user
@user_router.delete('/{user_id}')
def user_delete(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_active_user), _admin = Depends(require_admin)):
    if not service.delete_user(db, user_id, deleted_by=current_user.id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User deleted"}
