from typing import Optional, List
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from user.models import User
from .models import CompanyDetails, LetterHead
from .schema import CompanyDetailsPayload, CompanyDetailsUpdate, LetterHeadPayload, LetterHeadUpdate

# NOT NULL columns; an explicit null in a patch leaves them unchanged
_REQUIRED = ("company_name", "is_active")

def _active():
    return select(CompanyDetails).where(CompanyDetails.deleted_at.is_(None))

def get_company_details_list(db: Session) -> List[CompanyDetails]:
    return list(db.scalars(_active().order_by(CompanyDetails.created_at.desc(), CompanyDetails.id.desc())))

def get_company_details(db: Session, company_id: int) -> Optional[CompanyDetails]:
    return db.scalars(_active().where(CompanyDetails.id == company_id)).first()

def get_current_company_details(db: Session) -> Optional[CompanyDetails]:
    stmt = _active().order_by(CompanyDetails.created_at.desc(), CompanyDetails.id.desc())
    return db.scalars(stmt).first()

def create_company_details(db: Session, dto: CompanyDetailsPayload, *, created_by: Optional[int] = None) -> CompanyDetails:
    data = dto.model_dump()
    data["email"] = str(data["email"]) if data.get("email") else None
    row = CompanyDetails(**data, created_by=created_by, updated_by=created_by)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row

def update_company_details(db: Session, company_id: int, patch: CompanyDetailsUpdate, *, updated_by: Optional[int] = None) -> Optional[CompanyDetails]:
    row = get_company_details(db, company_id)
    if not row:
        return None
    data = patch.model_dump(exclude_unset=True)
    for key in _REQUIRED:
        if key in data and data[key] is None:
            del data[key]
    if data.get("email") is not None:
        data["email"] = str(data["email"])
    for k, v in data.items():
        setattr(row, k, v)
    row.updated_by = updated_by
    db.commit(); db.refresh(row)
    return row

def create_or_update_company_details(db: Session, dto: CompanyDetailsPayload, *, user_id: Optional[int] = None) -> CompanyDetails:
    """The setup screen edits a single company record; create it on first save."""
    current = get_current_company_details(db)
    if current is None:
        return create_company_details(db, dto, created_by=user_id)
    return update_company_details(db, current.id, CompanyDetailsUpdate(**dto.model_dump()), updated_by=user_id)

def delete_company_details(db: Session, company_id: int, *, deleted_by: Optional[int] = None) -> bool:
    row = get_company_details(db, company_id)
    if not row:
        return False
    row.soft_delete(by=deleted_by)
    db.commit()
    return True

# ---------- letter heads ----------

_LETTER_HEAD_REQUIRED = ("letter_head_name", "letter_head_align", "letter_head_footer_align")

def _active_letter_heads():
    return select(LetterHead).where(LetterHead.deleted_at.is_(None))

def get_letter_heads(db: Session) -> List[LetterHead]:
    return list(db.scalars(_active_letter_heads().order_by(LetterHead.created_at.desc(), LetterHead.id.desc())))

def get_letter_head(db: Session, letter_head_id: int) -> Optional[LetterHead]:
    return db.scalars(_active_letter_heads().where(LetterHead.id == letter_head_id)).first()

def get_current_letter_head(db: Session) -> Optional[LetterHead]:
    stmt = _active_letter_heads().order_by(LetterHead.created_at.desc(), LetterHead.id.desc())
    return db.scalars(stmt).first()

def create_letter_head(db: Session, dto: LetterHeadPayload, *, created_by: Optional[int] = None) -> LetterHead:
    row = LetterHead(**dto.model_dump(), created_by=created_by, updated_by=created_by)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row

def update_letter_head(db: Session, letter_head_id: int, patch: LetterHeadUpdate, *, updated_by: Optional[int] = None) -> Optional[LetterHead]:
    row = get_letter_head(db, letter_head_id)
    if not row:
        return None
    data = patch.model_dump(exclude_unset=True)
    for key in _LETTER_HEAD_REQUIRED:
        if key in data and data[key] is None:
            del data[key]
    for k, v in data.items():
        setattr(row, k, v)
    row.updated_by = updated_by
    db.commit(); db.refresh(row)
    return row

def delete_letter_head(db: Session, letter_head_id: int, *, deleted_by: Optional[int] = None) -> bool:
    row = get_letter_head(db, letter_head_id)
    if not row:
        return False
    row.soft_delete(by=deleted_by)
    db.commit()
    return True

# ---------- dashboard ----------

def get_dashboard_stats(db: Session) -> dict:
    """User counts among non-deleted users plus the current company and letter head."""
    base = select(func.count(User.id)).where(User.deleted_at.is_(None))
    company = get_current_company_details(db)
    letter_head = get_current_letter_head(db)
    return {
        "total_users": db.scalar(base) or 0,
        "active_users": db.scalar(base.where(User.is_active.is_(True))) or 0,
        "inactive_users": db.scalar(base.where(User.is_active.is_(False))) or 0,
        "company_configured": company is not None,
        "letter_head_configured": letter_head is not None,
        "company_details": company,
        "letter_head": letter_head,
    }
