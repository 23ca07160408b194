"""
Business rules sitting between the HTTP routes and the stores.

Store errors pass through unchanged; the services only add validation in
front of the store calls.
"""
from typing import List, Optional
import logging

from .errors import AuthenticationFailed, InvalidInput, NotFound, ValidationError
from .hashing import PasswordHasher
from .repositories import PropertyRepository, UserRepository
from .schemas import PropertyCard, PropertyIn, PropertyOut, UserCreate, UserOut, UserUpdate

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AccountService:
    def __init__(self, repo: UserRepository, hasher: PasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def login(self, email: str, password: str) -> None:
        """
        Check credentials against the active account for ``email``.

        Raises:
            AuthenticationFailed: unknown email or wrong password; the two
                cases are indistinguishable to the caller
        """
        try:
            digest = self.repo.get_password_digest_by_email(email)
        except NotFound as e:
            logger.warning("Login failed: no active account for email")
            raise AuthenticationFailed(INVALID_CREDENTIALS) from e

        if not self.hasher.verify(digest, password):
            logger.warning("Login failed: password verification failed")
            raise AuthenticationFailed(INVALID_CREDENTIALS)
        logger.info("User login successful")

    def register_user(self, user: UserCreate) -> UserOut:
        if not user.username or not user.username.strip():
            raise ValidationError("username cannot be empty")
        if not user.email or not user.email.strip():
            raise ValidationError("email cannot be empty")
        if not user.password:
            raise ValidationError("password cannot be empty")

        try:
            digest = self.hasher.hash(user.password)
        except InvalidInput:
            logger.warning("Rejected password for new user %s", user.username)
            raise

        created = self.repo.create(user.username, user.email, digest)
        logger.info(f"Registered user with ID {created.id}")
        return created

    def get_all_users(self) -> List[UserOut]:
        return self.repo.list_all()

    def get_user_by_id(self, user_id: int) -> UserOut:
        return self.repo.get_by_id(user_id)

    def get_user_by_email(self, email: str) -> UserOut:
        return self.repo.get_by_email(email)

    def update_user(self, user_id: int, user: UserUpdate) -> UserOut:
        return self.repo.update(user_id, user.username, user.email)

    def delete_user(self, user_id: int) -> None:
        self.repo.delete(user_id)


class ListingService:
    def __init__(self, repo: PropertyRepository):
        self.repo = repo

    @staticmethod
    def _validate(prop: Optional[PropertyIn]) -> None:
        if prop is None:
            logger.error("Property payload is missing")
            raise ValidationError("property cannot be empty")
        if not prop.address or not prop.address.strip():
            logger.error("Address cannot be empty")
            raise ValidationError("address cannot be empty")
        if prop.price <= 0:
            logger.error("Price must be greater than zero")
            raise ValidationError("price must be greater than zero")

    @staticmethod
    def _require_id(property_id: Optional[int]) -> None:
        if not property_id or property_id <= 0:
            logger.error("Property ID must be provided")
            raise ValidationError("property ID must be provided")

    def get_all_properties(self) -> List[PropertyOut]:
        properties = self.repo.list_all()
        logger.info(f"Retrieved {len(properties)} properties")
        return properties

    def get_property_cards(self) -> List[PropertyCard]:
        return self.repo.list_cards()

    def get_property_by_id(self, property_id: int) -> PropertyOut:
        prop = self.repo.get_by_id(property_id)
        if prop is None:
            logger.warning(f"No property found with ID {property_id}")
            raise NotFound("property not found")
        logger.info(f"Retrieved property with ID {property_id}")
        return prop

    def create_property(self, prop: Optional[PropertyIn]) -> PropertyOut:
        self._validate(prop)
        created = self.repo.create(prop)
        logger.info(f"Created property with ID {created.id}")
        return created

    def update_property(self, property_id: Optional[int], prop: Optional[PropertyIn]) -> PropertyOut:
        self._validate(prop)
        self._require_id(property_id)
        updated = self.repo.update(property_id, prop)
        logger.info(f"Updated property with ID {property_id}")
        return updated

    def delete_property(self, property_id: Optional[int]) -> None:
        self._require_id(property_id)
        self.repo.delete(property_id)
        logger.info(f"Deleted property with ID {property_id}")
