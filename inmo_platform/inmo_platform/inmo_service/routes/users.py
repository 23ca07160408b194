"""
User account endpoints
"""
from fastapi import APIRouter, Depends, Response, status
import logging

from ..dependencies import RecordId, get_account_service
from ..errors import AuthenticationFailed
from ..schemas import (
    ErrorResponse,
    MessageResponse,
    UserCreate,
    UserListResponse,
    UserLogin,
    UserResponse,
    UserUpdate,
)
from ..services import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

ERROR_RESPONSES = {
    400: {"description": "Invalid request", "model": ErrorResponse},
    404: {"description": "User not found", "model": ErrorResponse},
    500: {"description": "Internal server error", "model": ErrorResponse},
}


@router.post(
    "/login",
    response_model=MessageResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}}
)
def login(credentials: UserLogin, service: AccountService = Depends(get_account_service)):
    if not credentials.email or not credentials.password:
        raise AuthenticationFailed("Invalid email or password")
    service.login(credentials.email, credentials.password)
    return MessageResponse(message="Login successful")


@router.get("", response_model=UserListResponse, responses=ERROR_RESPONSES)
def list_users(service: AccountService = Depends(get_account_service)):
    logger.info("list_users endpoint called")
    users = service.get_all_users()
    return UserListResponse(data=users, count=len(users), message="Users retrieved successfully")


@router.get("/{user_id}", response_model=UserResponse, responses=ERROR_RESPONSES)
def get_user(user_id: RecordId, service: AccountService = Depends(get_account_service)):
    logger.info(f"get_user endpoint called with ID: {user_id}")
    user = service.get_user_by_id(user_id)
    return UserResponse(data=user, message="User retrieved successfully")


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**ERROR_RESPONSES, 409: {"description": "Username or email taken", "model": ErrorResponse}}
)
def create_user(user: UserCreate, service: AccountService = Depends(get_account_service)):
    created = service.register_user(user)
    return UserResponse(data=created, message="User created successfully")


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={**ERROR_RESPONSES, 409: {"description": "Username or email taken", "model": ErrorResponse}}
)
def update_user(user_id: RecordId, user: UserUpdate, service: AccountService = Depends(get_account_service)):
    updated = service.update_user(user_id, user)
    return UserResponse(data=updated, message="User updated successfully")


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, responses=ERROR_RESPONSES)
def delete_user(user_id: RecordId, service: AccountService = Depends(get_account_service)):
    logger.info(f"delete_user endpoint called with ID: {user_id}")
    service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
