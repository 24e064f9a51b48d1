from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from .models import Application

def get_applications(db: Session) -> List[Application]:
    return list(db.scalars(select(Application).order_by(Application.id.asc())))

def get_application(db: Session, application_id: int) -> Optional[Application]:
    return db.get(Application, application_id)

def get_application_by_name(db: Session, name: str) -> Optional[Application]:
    return db.scalars(select(Application).where(Application.name == name)).first()
