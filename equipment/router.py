from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from .schema import EquipmentSchema, EquipmentCreatePayload, EquipmentCreate, EquipmentUpdate
from . import service

equipment_router = APIRouter(prefix="/equipment", tags=["Equipment"])

# List equipment
@equipment_router.get("", response_model=list[EquipmentSchema])
def list_equipment(
    company_id: Optional[int] = Query(default=None, alias="companyId"),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    _user = Depends(get_current_active_user),
    ):
    return service.get_equipment_list(db, company_id=company_id, status=status_filter)

# Get equipment by id
@equipment_router.get("/{equipment_id}", response_model=EquipmentSchema)
def equipment_detail(equipment_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_equipment(db, equipment_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return obj

# Create equipment
@equipment_router.post("", response_model=EquipmentSchema, status_code=status.HTTP_201_CREATED)
def equipment_post(payload: EquipmentCreatePayload, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    internal = EquipmentCreate(**payload.model_dump(), created_by=user.id)
    return service.create_equipment(db, internal)

# Update equipment
@equipment_router.patch("/{equipment_id}", response_model=EquipmentSchema)
def equipment_patch(equipment_id: int, payload: EquipmentUpdate, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    try:
        obj = service.update_equipment(db, equipment_id, payload, updated_by=user.id)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Equipment could not be saved")
    if not obj:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return obj

# Delete equipment
@equipment_router.delete("/{equipment_id}")
def equipment_delete(equipment_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    if not service.delete_equipment(db, equipment_id, deleted_by=user.id):
        raise HTTPException(status_code=404, detail="Equipment not found")
    return {"message": "Equipment deleted"}
