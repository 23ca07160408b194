"""
Persistence for users and properties.

Both stores soft delete: rows get a ``deleted_at`` timestamp instead of being
removed, and every read, update and delete goes through ``_active()`` so that
marked rows are never seen again.
"""
from contextlib import contextmanager
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Iterator, List, Optional
import logging

from .errors import ConstraintViolation, NotFound, PersistenceError
from .models import Property, User, utcnow
from .schemas import PropertyCard, PropertyIn, PropertyOut, UserOut

logger = logging.getLogger(__name__)

# SQLite, PostgreSQL (SQLSTATE 23505) and MySQL report duplicate keys this way
UNIQUE_VIOLATION_MARKERS = ("UNIQUE constraint failed", "duplicate key value", "Duplicate entry")


def is_unique_violation(error: IntegrityError) -> bool:
    if getattr(error.orig, "pgcode", None) == "23505":
        return True
    message = str(error.orig)
    return any(marker in message for marker in UNIQUE_VIOLATION_MARKERS)


class SoftDeleteRepository:
    model = None
    label = "record"

    def __init__(self, db: Session):
        self.db = db

    def _active(self):
        return self.db.query(self.model).filter(self.model.deleted_at.is_(None))

    def _get_active(self, record_id: int):
        record = self._active().filter(self.model.id == record_id).first()
        if record is None:
            logger.warning(f"No active {self.label} found with ID {record_id}")
            raise NotFound(f"{self.label} not found")
        return record

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        """Roll back and re-raise database failures as domain errors."""
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            if not is_unique_violation(e):
                logger.error(f"Integrity check failed while trying to {action}: {e.orig}")
                raise PersistenceError(f"failed to {action}") from e
            logger.warning(f"Constraint violated while trying to {action}: {e.orig}")
            raise ConstraintViolation(f"{self.label} violates a uniqueness constraint") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}", exc_info=True)
            raise PersistenceError(f"failed to {action}") from e

    def delete(self, record_id: int) -> None:
        with self._translate_errors(f"delete {self.label} {record_id}"):
            record = self._get_active(record_id)
            record.deleted_at = utcnow()
            self.db.commit()
        logger.info(f"{self.label.capitalize()} with ID {record_id} soft deleted")


class UserRepository(SoftDeleteRepository):
    model = User
    label = "user"

    def _ensure_unique(self, username: str, email: str, exclude_id: Optional[int] = None) -> None:
        query = self._active().filter(or_(User.username == username, User.email == email))
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        clash = query.first()
        if clash is not None:
            field = "username" if clash.username == username else "email"
            raise ConstraintViolation(f"{field} already exists")

    def list_all(self) -> List[UserOut]:
        with self._translate_errors("list users"):
            users = self._active().order_by(User.created_at.desc(), User.id.desc()).all()
        logger.info(f"Retrieved {len(users)} users from the database")
        return [UserOut.model_validate(u) for u in users]

    def get_by_id(self, user_id: int) -> UserOut:
        with self._translate_errors(f"get user {user_id}"):
            user = self._get_active(user_id)
        return UserOut.model_validate(user)

    def get_by_email(self, email: str) -> UserOut:
        with self._translate_errors("get user by email"):
            user = self._active().filter(User.email == email).first()
        if user is None:
            logger.warning("No active user found with the provided email")
            raise NotFound("user not found")
        return UserOut.model_validate(user)

    def get_password_digest_by_email(self, email: str) -> str:
        with self._translate_errors("look up password digest"):
            digest = self._active().with_entities(User.password).filter(User.email == email).scalar()
        if digest is None:
            logger.warning("No active user found with the provided email")
            raise NotFound("user not found")
        return digest

    def create(self, username: str, email: str, password_digest: str) -> UserOut:
        with self._translate_errors("create user"):
            self._ensure_unique(username, email)
            user = User(username=username, email=email, password=password_digest)
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        logger.info(f"User created successfully with ID: {user.id}")
        return UserOut.model_validate(user)

    def update(self, user_id: int, username: str, email: str) -> UserOut:
        with self._translate_errors(f"update user {user_id}"):
            user = self._get_active(user_id)
            self._ensure_unique(username, email, exclude_id=user_id)
            user.username = username
            user.email = email
            user.updated_at = utcnow()
            self.db.commit()
            self.db.refresh(user)
        logger.info(f"User with ID {user_id} updated successfully")
        return UserOut.model_validate(user)


class PropertyRepository(SoftDeleteRepository):
    model = Property
    label = "property"

    def list_all(self) -> List[PropertyOut]:
        with self._translate_errors("list properties"):
            properties = self._active().order_by(Property.id).all()
        logger.info(f"Retrieved {len(properties)} properties from the database")
        return [PropertyOut.model_validate(p) for p in properties]

    def list_cards(self) -> List[PropertyCard]:
        with self._translate_errors("list property cards"):
            properties = self._active().order_by(Property.created_at.desc(), Property.id.desc()).all()
        return [PropertyCard.model_validate(p) for p in properties]

    def get_by_id(self, property_id: int) -> PropertyOut:
        with self._translate_errors(f"get property {property_id}"):
            prop = self._get_active(property_id)
        return PropertyOut.model_validate(prop)

    def create(self, data: PropertyIn) -> PropertyOut:
        values = data.model_dump()
        if values["listing_date"] is None:
            values["listing_date"] = utcnow()
        with self._translate_errors("create property"):
            prop = Property(**values)
            self.db.add(prop)
            self.db.commit()
            self.db.refresh(prop)
        logger.info(f"Property created successfully with ID: {prop.id}")
        return PropertyOut.model_validate(prop)

    def update(self, property_id: int, data: PropertyIn) -> PropertyOut:
        """Replace every field of an active property."""
        with self._translate_errors(f"update property {property_id}"):
            prop = self._get_active(property_id)
            values = data.model_dump()
            if values["listing_date"] is None:
                values["listing_date"] = prop.listing_date
            for field, value in values.items():
                setattr(prop, field, value)
            prop.updated_at = utcnow()
            self.db.commit()
            self.db.refresh(prop)
        logger.info(f"Property with ID {property_id} updated successfully")
        return PropertyOut.model_validate(prop)
