from fastapi import Depends, Path, Request
from sqlalchemy.orm import Session
from typing import Annotated

from .db import get_db
from .hashing import PasswordHasher
from .repositories import PropertyRepository, UserRepository
from .schemas import MAX_RECORD_ID
from .services import AccountService, ListingService


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_account_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
) -> AccountService:
    return AccountService(UserRepository(db), hasher)


def get_listing_service(db: Session = Depends(get_db)) -> ListingService:
    return ListingService(PropertyRepository(db))


# Path id bounded by the INTEGER column range
RecordId = Annotated[int, Path(le=MAX_RECORD_ID)]
