from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import ConflictError, NotFoundError
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin
from application.schemas import ApplicationSchema
from .schemas import RoleSchema, RoleCreatePayload, RoleApplicationsUpdate
from . import service

role_router = APIRouter(prefix="/roles", tags=["Roles"])

@role_router.get("", response_model=list[RoleSchema])
def list_roles(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.get_roles(db)

@role_router.post("", response_model=RoleSchema, status_code=status.HTTP_201_CREATED)
def role_post(payload: RoleCreatePayload, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    try:
        return service.create_role(db, payload.name)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

@role_router.get("/{role_id}/applications", response_model=list[ApplicationSchema])
def role_applications(role_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    if service.get_role(db, role_id) is None:
        raise HTTPException(status_code=404, detail="Role not found")
    return service.get_role_applications(db, role_id)

@role_router.put("/{role_id}/applications", response_model=list[ApplicationSchema])
def role_applications_put(role_id: int, payload: RoleApplicationsUpdate, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    try:
        return service.set_role_applications(db, role_id, payload.application_ids)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@role_router.post("/{role_id}/applications/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def role_application_grant(role_id: int, application_id: int, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    try:
        service.grant_application(db, role_id, application_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@role_router.delete("/{role_id}/applications/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def role_application_revoke(role_id: int, application_id: int, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    service.revoke_application(db, role_id, application_id)
