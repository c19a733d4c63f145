"""Import models so Base.metadata knows every table."""

from app.models.place import CoffeePlace  # noqa: F401
from app.models.place_photo import PlacePhoto  # noqa: F401
