from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import ConflictError, NotFoundError
from auth.services.auth_service import get_current_active_user
from .schemas import LocationSchema, LocationTree, LocationPath, LocationCreatePayload, LocationCreate, LocationUpdate
from . import service

location_router = APIRouter(prefix="/locations", tags=["Locations"])

# List locations, optionally filtered
@location_router.get("", response_model=list[LocationSchema])
def list_locations(
    company_id: Optional[int] = Query(default=None, alias="companyId"),
    location_type: Optional[str] = Query(default=None, alias="type"),
    active: Optional[bool] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    _user = Depends(get_current_active_user),
    ):
    return service.get_locations(db, company_id=company_id, location_type=location_type, active=active, search=search)

# Whole forest, nested
@location_router.get("/hierarchy", response_model=list[LocationTree])
def location_hierarchy(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.get_location_hierarchy(db)

# Top level locations
@location_router.get("/root", response_model=list[LocationSchema])
def root_locations(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.find_root_locations(db)

# Locations inside a bounding box
@location_router.get("/bounds/{north_east_lat}/{north_east_lng}/{south_west_lat}/{south_west_lng}", response_model=list[LocationSchema])
def locations_by_bounds(
    north_east_lat: float,
    north_east_lng: float,
    south_west_lat: float,
    south_west_lng: float,
    db: Session = Depends(get_db),
    _user = Depends(get_current_active_user),
    ):
    return service.get_locations_by_bounds(
        db,
        north_east_lat=north_east_lat,
        north_east_lng=north_east_lng,
        south_west_lat=south_west_lat,
        south_west_lng=south_west_lng,
    )

# Get location by id
@location_router.get("/{location_id}", response_model=LocationSchema)
def location_detail(location_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_location(db, location_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Location not found")
    return obj

@location_router.get("/{location_id}/children", response_model=list[LocationSchema])
def location_children(location_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.find_child_locations(db, location_id)

@location_router.get("/{location_id}/descendants", response_model=list[LocationSchema])
def location_descendants(location_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    try:
        return service.get_location_descendants(db, location_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Location not found")

@location_router.get("/{location_id}/ancestors", response_model=list[LocationSchema])
def location_ancestors(location_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    try:
        return service.get_location_ancestors(db, location_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Location not found")

@location_router.get("/{location_id}/path", response_model=LocationPath)
def location_path(location_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    try:
        return LocationPath(id=location_id, path=service.get_location_path(db, location_id))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Location not found")

# Create location
@location_router.post("", response_model=LocationSchema, status_code=status.HTTP_201_CREATED)
def location_post(payload: LocationCreatePayload, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    internal = LocationCreate(**payload.model_dump(), created_by=user.id)
    try:
        return service.create_location(db, internal)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Parent location not found")
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Location could not be saved")

# Update location
@location_router.patch("/{location_id}", response_model=LocationSchema)
def location_patch(location_id: int, payload: LocationUpdate, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    obj = service.get_location(db, location_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Location not found")
    try:
        return service.update_location(db, location_id, payload, updated_by=user.id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Parent location not found")
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Location could not be saved")

# Delete location
@location_router.delete("/{location_id}")
def location_delete(location_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    obj = service.get_location(db, location_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Location not found")
    try:
        service.delete_location(db, location_id, deleted_by=user.id)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"message": "Location deleted"}
