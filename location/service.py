from typing import Optional, List
from loguru import logger
from sqlalchemy import select, or_
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, NotFoundError
from .models import Location
from .schemas import LocationCreate, LocationUpdate, LocationTree
from . import hierarchy

_NEWEST_FIRST = (Location.created_at.desc(), Location.id.desc())
# NOT NULL columns; an explicit null in a patch leaves them unchanged
_REQUIRED = ("name", "is_active")

def _active():
    return select(Location).where(Location.deleted_at.is_(None))

def _load_index(db: Session) -> tuple[hierarchy.ById, hierarchy.ByParent]:
    return hierarchy.index_locations(db.scalars(_active()))

def _require_location(db: Session, location_id: int) -> Location:
    loc = get_location(db, location_id)
    if loc is None:
        raise NotFoundError(f"Location with ID {location_id} not found")
    return loc

# ---------- CRUD ----------

def get_locations(
    db: Session,
    *,
    company_id: Optional[int] = None,
    location_type: Optional[str] = None,
    active: Optional[bool] = None,
    search: Optional[str] = None,
    ) -> List[Location]:
    stmt = _active()
    if company_id is not None:
        stmt = stmt.where(Location.company_id == company_id)
    if location_type is not None:
        stmt = stmt.where(Location.location_type == location_type)
    if active is not None:
        stmt = stmt.where(Location.is_active == active)
    if search:
        term = f"%{search}%"
        stmt = stmt.where(or_(
            Location.name.ilike(term),
            Location.code.ilike(term),
            Location.address.ilike(term),
            Location.city.ilike(term),
        ))
    return list(db.scalars(stmt.order_by(*_NEWEST_FIRST)))

def get_location(db: Session, location_id: int) -> Optional[Location]:
    return db.scalars(_active().where(Location.id == location_id)).first()

def create_location(db: Session, dto: LocationCreate) -> Location:
    if dto.parent_location_id is not None:
        _require_location(db, dto.parent_location_id)
    db_loc = Location(**dto.model_dump())
    db.add(db_loc)
    db.commit()
    db.refresh(db_loc)
    return db_loc

def update_location(db: Session, location_id: int, patch: LocationUpdate, *, updated_by: Optional[int] = None) -> Optional[Location]:
    db_loc = get_location(db, location_id)
    if not db_loc:
        return None
    data = patch.model_dump(exclude_unset=True)
    for key in _REQUIRED:
        if key in data and data[key] is None:
            del data[key]
    new_parent = data.get("parent_location_id")
    if new_parent is not None and new_parent != db_loc.parent_location_id:
        _check_reparent(db, location_id, new_parent)
    for k, v in data.items():
        setattr(db_loc, k, v)
    db_loc.updated_by = updated_by
    db.commit(); db.refresh(db_loc)
    return db_loc

def delete_location(db: Session, location_id: int, *, deleted_by: Optional[int] = None) -> bool:
    db_loc = get_location(db, location_id)
    if not db_loc:
        return False
    if find_child_locations(db, location_id):
        raise ConflictError("Location has child locations; move or delete them first")
    db_loc.soft_delete(by=deleted_by)
    db.commit()
    logger.info("Soft-deleted location {} by user {}", location_id, deleted_by)
    return True

def _check_reparent(db: Session, location_id: int, new_parent_id: int) -> None:
    _require_location(db, new_parent_id)
    by_id, _ = _load_index(db)
    if hierarchy.would_create_cycle(by_id, location_id, new_parent_id):
        logger.warning("Rejected re-parent of location {} under {}: cycle", location_id, new_parent_id)
        raise ConflictError("Location cannot be moved under itself or one of its descendants")

# ---------- hierarchy ----------

def find_root_locations(db: Session) -> List[Location]:
    stmt = _active().where(Location.parent_location_id.is_(None)).order_by(*_NEWEST_FIRST)
    return list(db.scalars(stmt))

def find_child_locations(db: Session, parent_id: int) -> List[Location]:
    # unknown parent is not an error, it just has no children
    stmt = _active().where(Location.parent_location_id == parent_id).order_by(*_NEWEST_FIRST)
    return list(db.scalars(stmt))

def get_location_descendants(db: Session, location_id: int) -> List[Location]:
    _require_location(db, location_id)
    _, by_parent = _load_index(db)
    return hierarchy.descendants(by_parent, location_id)

def get_location_ancestors(db: Session, location_id: int) -> List[Location]:
    _require_location(db, location_id)
    by_id, _ = _load_index(db)
    return hierarchy.ancestors(by_id, location_id)

def get_location_hierarchy(db: Session) -> List[LocationTree]:
    _, by_parent = _load_index(db)

    def _node(row: Location, kids: list[LocationTree]) -> LocationTree:
        node = LocationTree.model_validate(row)
        node.child_locations = kids
        return node

    return hierarchy.build_forest(by_parent, _node)

def get_location_path(db: Session, location_id: int) -> str:
    """Human readable chain such as ``Plant A > Line 1 > Station 1``."""
    loc = _require_location(db, location_id)
    by_id, _ = _load_index(db)
    chain = list(reversed(hierarchy.ancestors(by_id, location_id))) + [loc]
    return " > ".join(l.name for l in chain)

def get_locations_by_bounds(
    db: Session,
    *,
    north_east_lat: float,
    north_east_lng: float,
    south_west_lat: float,
    south_west_lng: float,
    ) -> List[Location]:
    stmt = _active().where(
        Location.latitude.between(south_west_lat, north_east_lat),
        Location.longitude.between(south_west_lng, north_east_lng),
    ).order_by(*_NEWEST_FIRST)
    return list(db.scalars(stmt))
