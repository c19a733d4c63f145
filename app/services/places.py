"""Coffee place persistence helpers."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.models.place import CoffeePlace


def upsert_place(db: Session, data: dict) -> CoffeePlace:
    """Insert or update a place by id."""
    try:
        place = db.get(CoffeePlace, data["id"])
        if place:
            for field, value in data.items():
                if field != "id":
                    setattr(place, field, value)
        else:
            place = CoffeePlace(**data)
            db.add(place)
        db.commit()
        db.refresh(place)
        return place
    except Exception:
        db.rollback()
        raise


def get_place(db: Session, place_id: str) -> CoffeePlace | None:
    return db.get(CoffeePlace, place_id)


def get_place_by_id_or_slug(db: Session, key: str) -> CoffeePlace | None:
    return db.execute(
        select(CoffeePlace).where(or_(CoffeePlace.id == key, CoffeePlace.slug == key))
    ).scalars().first()


def list_places(db: Session, limit: int = 20, offset: int = 0) -> list[CoffeePlace]:
    """Places ordered by Google rating, best first, unrated last."""
    stmt = (
        select(CoffeePlace)
        .order_by(CoffeePlace.rating.desc().nulls_last(), CoffeePlace.name)
        .offset(offset)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())
