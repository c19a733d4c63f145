"""Photo upload log model."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from app.db.base import Base


class PlacePhoto(Base):
    """Append-only record of photos uploaded to object storage.

    Written by the photo migration step, never read back by it.
    """

    __tablename__ = "place_photos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    place_id = Column(String(255), nullable=False, index=True)
    storage_path = Column(Text, nullable=False)  # {place_id}/{index}.{ext}
    order_index = Column(Integer, nullable=False)
    width = Column(Integer)
    height = Column(Integer)
    public_url = Column(Text)
    uploaded_at = Column(DateTime(timezone=True), nullable=False)
