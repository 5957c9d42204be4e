"""
User management API routes
"""

import logging
from typing import Annotated, List
from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from database.connection import Database, get_database
from models.user import User
from services.base_service import RESOURCE_NOT_FOUND, ServiceResult
from services.users_service import UsersService

router = APIRouter()
logger = logging.getLogger(__name__)

# Range of the int4 id column; anything outside cannot be encoded by the driver
MIN_USER_ID = -2147483648
MAX_USER_ID = 2147483647

UserId = Annotated[int, Path(ge=MIN_USER_ID, le=MAX_USER_ID, description="Store-assigned user ID")]


def get_users_service(db: Database = Depends(get_database)) -> UsersService:
    return UsersService(db)


async def user_payload(request: Request) -> User:
    """Decode the request body as a JSON user, whatever Content-Type it was sent with"""
    try:
        return User.model_validate_json(await request.body())
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in e.errors(include_url=False)]
        )


def _raise_for_failure(result: ServiceResult) -> None:
    """Map a failed service result onto an HTTP error"""
    if result.error_type == RESOURCE_NOT_FOUND:
        raise HTTPException(status_code=404, detail=result.error)
    logger.warning(f"Mapping {result.error_type} to HTTP 500: {result.error}")
    raise HTTPException(status_code=500, detail="Database operation failed")


def _not_found() -> Response:
    # Absence is answered with an empty body
    return Response(status_code=404)


@router.get("", response_model=List[User])
async def list_users(users_service: UsersService = Depends(get_users_service)):
    """List every user"""
    result = await users_service.list_users()
    if not result.success:
        _raise_for_failure(result)
    return result.data


@router.post("", response_model=User)
async def create_user(
    payload: User = Depends(user_payload),
    users_service: UsersService = Depends(get_users_service)
):
    """Create a new user"""
    result = await users_service.create_user(payload)
    if not result.success:
        _raise_for_failure(result)
    return result.data[0]


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: UserId,
    users_service: UsersService = Depends(get_users_service)
):
    """Get user details"""
    result = await users_service.get_user(user_id)
    if result.error_type == RESOURCE_NOT_FOUND:
        return _not_found()
    if not result.success:
        _raise_for_failure(result)
    return result.data[0]


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: UserId,
    payload: User = Depends(user_payload),
    users_service: UsersService = Depends(get_users_service)
):
    """Replace a user's name and email"""
    result = await users_service.update_user(user_id, payload)
    if result.error_type == RESOURCE_NOT_FOUND:
        return _not_found()
    if not result.success:
        _raise_for_failure(result)
    return result.data[0]


@router.delete("/{user_id}", response_model=str)
async def delete_user(
    user_id: UserId,
    users_service: UsersService = Depends(get_users_service)
):
    """Delete a user"""
    result = await users_service.delete_user(user_id)
    if result.error_type == RESOURCE_NOT_FOUND:
        return _not_found()
    if not result.success:
        _raise_for_failure(result)
    return "User deleted"
