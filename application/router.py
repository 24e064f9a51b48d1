from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from .schemas import ApplicationSchema
from . import service

application_router = APIRouter(prefix="/applications", tags=["Applications"])

@application_router.get("", response_model=list[ApplicationSchema])
def list_applications(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.get_applications(db)

@application_router.get("/{application_id}", response_model=ApplicationSchema)
def application_detail(application_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_application(db, application_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Application not found")
    return obj
