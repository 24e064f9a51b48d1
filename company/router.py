from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin
from .schema import (
    CompanyDetailsSchema,
    CompanyDetailsPayload,
    CompanyDetailsUpdate,
    LetterHeadSchema,
    LetterHeadPayload,
    LetterHeadUpdate,
    DashboardStats,
)
from . import service

company_router = APIRouter(prefix="/setup", tags=["Setup"])

# Current company (the one the setup screen edits)
@company_router.get("/company", response_model=CompanyDetailsSchema)
def current_company(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_current_company_details(db)
    if not obj:
        raise HTTPException(status_code=404, detail="Company details not found")
    return obj

@company_router.post("/company", response_model=CompanyDetailsSchema)
def company_save(payload: CompanyDetailsPayload, db: Session = Depends(get_db), user = Depends(get_current_active_user), _admin = Depends(require_admin)):
    return service.create_or_update_company_details(db, payload, user_id=user.id)

@company_router.get("/company-details", response_model=list[CompanyDetailsSchema])
def company_details_list(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.get_company_details_list(db)

@company_router.post("/company-details", response_model=CompanyDetailsSchema, status_code=status.HTTP_201_CREATED)
def company_details_post(payload: CompanyDetailsPayload, db: Session = Depends(get_db), user = Depends(get_current_active_user), _admin = Depends(require_admin)):
    return service.create_company_details(db, payload, created_by=user.id)

@company_router.get("/company-details/{company_id}", response_model=CompanyDetailsSchema)
def company_details_detail(company_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_company_details(db, company_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Company details not found")
    return obj

@company_router.patch("/company-details/{company_id}", response_model=CompanyDetailsSchema)
def company_details_patch(company_id: int, payload: CompanyDetailsUpdate, db: Session = Depends(get_db), user = Depends(get_current_active_user), _admin = Depends(require_admin)):
    try:
        obj = service.update_company_details(db, company_id, payload, updated_by=user.id)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Company details could not be saved")
    if not obj:
        raise HTTPException(status_code=404, detail="Company details not found")
    return obj

@company_router.delete("/company-details/{company_id}")
def company_details_delete(company_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user), _admin = Depends(require_admin)):
    if not service.delete_company_details(db, company_id, deleted_by=user.id):
        raise HTTPException(status_code=404, detail="Company details not found")
    return {"message": "Company details deleted"}

# Setup dashboard
@company_router.get("/dashboard", response_model=DashboardStats)
def setup_dashboard(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.get_dashboard_stats(db)

# Current letter head (most recent)
@company_router.get("/letter-head", response_model=LetterHeadSchema)
def current_letter_head(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_current_letter_head(db)
    if not obj:
        raise HTTPException(status_code=404, detail="Letter head not found")
    return obj

@company_router.get("/letter-heads", response_model=list[LetterHeadSchema])
def letter_head_list(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.get_letter_heads(db)

@company_router.post("/letter-heads", response_model=LetterHeadSchema, status_code=status.HTTP_201_CREATED)
def letter_head_post(payload: LetterHeadPayload, db: Session = Depends(get_db), user = Depends(get_current_active_user), _admin = Depends(require_admin)):
    return service.create_letter_head(db, payload, created_by=user.id)

@company_router.get("/letter-heads/{letter_head_id}", response_model=LetterHeadSchema)
def letter_head_detail(letter_head_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_letter_head(db, letter_head_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Letter head not found")
    return obj

@company_router.patch("/letter-heads/{letter_head_id}", response_model=LetterHeadSchema)
def letter_head_patch(letter_head_id: int, payload: LetterHeadUpdate, db: Session = Depends(get_db), user = Depends(get_current_active_user), _admin = Depends(require_admin)):
    try:
        obj = service.update_letter_head(db, letter_head_id, payload, updated_by=user.id)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Letter head could not be saved")
    if not obj:
        raise HTTPException(status_code=404, detail="Letter head not found")
    return obj

@company_router.delete("/letter-heads/{letter_head_id}")
def letter_head_delete(letter_head_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user), _admin = Depends(require_admin)):
    if not service.delete_letter_head(db, letter_head_id, deleted_by=user.id):
        raise HTTPException(status_code=404, detail="Letter head not found")
    return {"message": "Letter head deleted"}
