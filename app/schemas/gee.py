# app/schemas/gee.py
from typing import Optional
from pydantic import BaseModel, Field, ValidationError

from app.exceptions.errors import InvalidInputError

class Coordinate(BaseModel):
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    @classmethod
    def parse(cls, lat: Optional[str], lon: Optional[str]) -> "Coordinate":
        """Parsea los query params crudos; cualquier fallo es InvalidInputError."""
        try:
            return cls(lat=lat, lon=lon)
        except ValidationError:
            raise InvalidInputError()

class NDVIResponse(BaseModel):
    date: str = Field(..., description="Fecha de adquisición, YYYY-MM-DD")
    ndvi: float

class ErrorResponse(BaseModel):
    error: str
