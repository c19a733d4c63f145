"""Place endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.place import PlaceOut
from app.services.places import get_place_by_id_or_slug, list_places

router = APIRouter(prefix="/places", tags=["places"])


@router.get("", response_model=list[PlaceOut])
def read_places(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> list[PlaceOut]:
    """Return places ordered by rating, best first."""
    return [PlaceOut.model_validate(p) for p in list_places(db, limit=limit, offset=offset)]


@router.get("/{place_key}", response_model=PlaceOut)
def read_place(place_key: str, db: Session = Depends(get_db)) -> PlaceOut:
    """Return one place by Google place_id or slug."""
    place = get_place_by_id_or_slug(db, place_key)
    if place is None:
        raise HTTPException(status_code=404, detail="Place not found")
    return PlaceOut.model_validate(place)
