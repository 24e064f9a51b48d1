from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.orm import Session
from .models import Equipment
from .schema import EquipmentCreate, EquipmentUpdate

# NOT NULL columns; an explicit null in a patch leaves them unchanged
_REQUIRED = ("name",)

def _active():
    return select(Equipment).where(Equipment.deleted_at.is_(None))

def get_equipment_list(db: Session, *, company_id: Optional[int] = None, status: Optional[str] = None) -> List[Equipment]:
    stmt = _active()
    if company_id is not None:
        stmt = stmt.where(Equipment.company_id == company_id)
    if status is not None:
        stmt = stmt.where(Equipment.status == status)
    stmt = stmt.order_by(Equipment.created_at.desc(), Equipment.id.desc())
    return list(db.scalars(stmt))

def get_equipment(db: Session, equipment_id: int) -> Optional[Equipment]:
    return db.scalars(_active().where(Equipment.id == equipment_id)).first()

def create_equipment(db: Session, dto: EquipmentCreate) -> Equipment:
    row = Equipment(**dto.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return row

def update_equipment(db: Session, equipment_id: int, patch: EquipmentUpdate, *, updated_by: Optional[int] = None) -> Optional[Equipment]:
    row = get_equipment(db, equipment_id)
    if not row:
        return None
    data = patch.model_dump(exclude_unset=True)
    for key in _REQUIRED:
        if key in data and data[key] is None:
            del data[key]
    for k, v in data.items():
        setattr(row, k, v)
    row.updated_by = updated_by
    db.commit(); db.refresh(row)
    return row

def delete_equipment(db: Session, equipment_id: int, *, deleted_by: Optional[int] = None) -> bool:
    row = get_equipment(db, equipment_id)
    if not row:
        return False
    row.soft_delete(by=deleted_by)
    db.commit()
    return True
