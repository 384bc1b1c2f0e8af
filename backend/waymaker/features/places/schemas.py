"""
Place schemas.

Pydantic models for API response.
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional


class PlaceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    lat: float
    lng: float
    category: Optional[str] = None
    type: Optional[str] = None
