from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, Float, JSON, Index, Enum
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum

from .db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class PropertyType(str, enum.Enum):
    HOUSE = "house"
    APARTMENT = "apartment"
    LAND = "land"
    COMMERCIAL = "commercial"
    STOREHOUSE = "storehouse"
    OFFICE = "office"
    INDUSTRIAL = "industrial"
    OTHER = "other"


class TransactionType(str, enum.Enum):
    SALE = "sale"
    RENTAL = "rental"


class PropertyStatus(str, enum.Enum):
    AVAILABLE = "available"
    SOLD = "sold"
    RENTED = "rented"
    RESERVED = "reserved"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    # Soft delete marker; NULL means the row is active
    deleted_at = Column(DateTime, nullable=True, index=True)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, deleted={self.deleted_at is not None})>"


# Uniqueness only binds active rows, so a soft-deleted username can be reused
ACTIVE_USER_INDEXES = (
    Index(
        "uq_users_username_active",
        User.username,
        unique=True,
        sqlite_where=User.deleted_at.is_(None),
        postgresql_where=User.deleted_at.is_(None),
    ),
    Index(
        "uq_users_email_active",
        User.email,
        unique=True,
        sqlite_where=User.deleted_at.is_(None),
        postgresql_where=User.deleted_at.is_(None),
    ),
)


class Property(Base):
    """
    Real-estate listing.

    ``owner_id`` and ``user_id`` (managing agent) point at users by id only;
    there is no foreign key and deleting a user leaves its listings alone.
    """
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, default="")
    listing_date = Column(DateTime, nullable=True, default=utcnow)

    # Location
    address = Column(String(500), nullable=False)
    neighborhood = Column(String(255), nullable=False, default="")
    city = Column(String(255), nullable=False, default="")
    zone = Column(String(255), nullable=False, default="")
    reference = Column(String(500), nullable=False, default="")
    notes = Column(Text, nullable=False, default="")

    # Size and layout
    price = Column(Float, nullable=False)
    construction_m2 = Column(Integer, nullable=False, default=0)
    land_m2 = Column(Integer, nullable=False, default=0)
    garden_m2 = Column(Integer, nullable=False, default=0)
    is_occupied = Column(Boolean, nullable=False, default=False)
    is_furnished = Column(Boolean, nullable=False, default=False)
    floors = Column(Integer, nullable=False, default=1)
    bedrooms = Column(Integer, nullable=False, default=0)
    bathrooms = Column(Integer, nullable=False, default=0)
    garage_size = Column(Integer, nullable=False, default=0)  # number of cars

    # String sets stored as JSON lists
    gas_types = Column(JSON, nullable=False, default=list)
    amenities = Column(JSON, nullable=False, default=list)
    extras = Column(JSON, nullable=False, default=list)
    utilities = Column(JSON, nullable=False, default=list)

    owner_id = Column(Integer, nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)

    property_type = Column(
        Enum(PropertyType, name="property_type", native_enum=False, values_callable=_enum_values),
        nullable=False
    )
    transaction_type = Column(
        Enum(TransactionType, name="transaction_type", native_enum=False, values_callable=_enum_values),
        nullable=False
    )
    status = Column(
        Enum(PropertyStatus, name="property_status", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=PropertyStatus.AVAILABLE
    )

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime, nullable=True, index=True)

    agent = relationship(
        "User",
        primaryjoin="and_(foreign(Property.user_id) == User.id, User.deleted_at.is_(None))",
        viewonly=True,
        lazy="joined",
    )

    __table_args__ = (
        Index("ix_properties_status_city", "status", "city"),
    )

    def __repr__(self):
        return f"<Property(id={self.id}, title={self.title}, status={self.status})>"
