"""
Pydantic schemas for request binding and response shaping
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional
from datetime import datetime

from .models import PropertyType, TransactionType, PropertyStatus


# Users
class UserCreate(BaseModel):
    username: str
    email: str
    password: str


class UserUpdate(BaseModel):
    username: str
    email: str


class UserLogin(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    """Public view of a user; the password digest is never part of it."""
    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Largest id a signed 64-bit INTEGER column can hold
MAX_RECORD_ID = 2**63 - 1


class MessageResponse(BaseModel):
    message: str


# Properties
class PropertyIn(BaseModel):
    """
    Full property record as sent by clients.

    Create and update both bind this schema; an update replaces every field.
    Address and price are checked by the listing service rather than here so
    that the error carries the service's message.
    """
    title: str = ""
    listing_date: Optional[datetime] = None
    address: str = ""
    neighborhood: str = ""
    city: str = ""
    zone: str = ""
    reference: str = ""
    notes: str = ""
    price: float = Field(0, allow_inf_nan=False)
    construction_m2: int = Field(0, ge=0)
    land_m2: int = Field(0, ge=0)
    garden_m2: int = Field(0, ge=0)
    is_occupied: bool = False
    is_furnished: bool = False
    floors: int = Field(1, ge=0)
    bedrooms: int = Field(0, ge=0)
    bathrooms: int = Field(0, ge=0)
    garage_size: int = Field(0, ge=0, description="Number of cars")
    gas_types: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    extras: List[str] = Field(default_factory=list)
    utilities: List[str] = Field(default_factory=list)
    owner_id: int = Field(..., gt=0)
    user_id: int = Field(..., gt=0, description="Managing agent")
    property_type: PropertyType
    transaction_type: TransactionType
    status: PropertyStatus = PropertyStatus.AVAILABLE

    @field_validator("gas_types", "amenities", "extras", "utilities", mode="before")
    @classmethod
    def null_list_to_empty(cls, v: Any) -> Any:
        """Absent string sets are stored as empty lists, never null"""
        if v is None:
            return []
        return v

    @field_validator("title", "neighborhood", "city", "zone", "reference", "notes", mode="before")
    @classmethod
    def null_text_to_empty(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Casa en Lomas",
                    "address": "Av. Reforma 123",
                    "neighborhood": "Lomas",
                    "city": "CDMX",
                    "zone": "Poniente",
                    "price": 4500000.0,
                    "construction_m2": 180,
                    "land_m2": 240,
                    "bedrooms": 3,
                    "bathrooms": 2,
                    "garage_size": 2,
                    "gas_types": ["natural"],
                    "amenities": ["pool"],
                    "owner_id": 1,
                    "user_id": 2,
                    "property_type": "house",
                    "transaction_type": "sale"
                }
            ]
        }
    }


class PropertyOut(PropertyIn):
    id: int
    created_at: datetime
    updated_at: datetime
    agent: Optional[UserOut] = None

    model_config = ConfigDict(from_attributes=True)


class PropertyCard(BaseModel):
    """Reduced property view for listing pages."""
    id: int
    title: str
    price: float
    bedrooms: int
    bathrooms: int
    construction_m2: int
    city: str
    neighborhood: str
    property_type: PropertyType
    transaction_type: TransactionType
    status: PropertyStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Envelopes
class UserResponse(BaseModel):
    data: UserOut
    message: str


class UserListResponse(BaseModel):
    data: List[UserOut]
    count: int
    message: str


class PropertyResponse(BaseModel):
    data: PropertyOut
    message: str


class PropertyListResponse(BaseModel):
    data: List[PropertyOut]
    count: int
    message: str


class PropertyCardListResponse(BaseModel):
    data: List[PropertyCard]
    count: int
    message: str


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Optional[List[Any]] = None
