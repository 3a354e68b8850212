# backoffice/users.py
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Response, status
from sqlalchemy.exc import IntegrityError

from .crud import ERROR_RESPONSES, create_row, delete_row, get_row, list_rows, update_body, update_row
from .database import Gateway, get_gateway
from .errors import ValidationError, error_response, is_error
from .schemas import UserCreate, UserOut, UserUpdate
from .validators import USER

router = APIRouter(prefix="/api/users", tags=["users"], responses={500: ERROR_RESPONSES[500]})

INCLUDE = ("feedbacks",)
DUPLICATE_EMAIL = "Email already exists"


@router.get("", response_model=List[UserOut])
async def list_users(gateway: Gateway = Depends(get_gateway)):
    """Returns all users with the feedbacks they wrote."""
    return await list_rows(gateway, USER, include=INCLUDE)


@router.get("/{user_id}", response_model=UserOut, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def get_user(
    user_id: str = Path(..., description="The user ID"),
    gateway: Gateway = Depends(get_gateway),
):
    user = await get_row(gateway, USER, user_id, include=INCLUDE)
    if is_error(user):
        return error_response(user)
    return user


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED, responses={400: ERROR_RESPONSES[400]})
async def create_user(payload: UserCreate, gateway: Gateway = Depends(get_gateway)):
    """Create a user. The email must not be taken yet."""
    fields = payload.model_dump()
    fields["name"] = fields.get("name") or ""
    try:
        user = await create_row(gateway, USER, fields, include=INCLUDE)
    except IntegrityError:
        # unique constraint on users.email
        return error_response(ValidationError(DUPLICATE_EMAIL))
    if is_error(user):
        return error_response(user)
    return user


@router.put("/{user_id}", response_model=UserOut, openapi_extra=update_body(UserUpdate), responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def update_user(
    payload: Any = Body(...),
    user_id: str = Path(..., description="The user ID"),
    gateway: Gateway = Depends(get_gateway),
):
    try:
        user = await update_row(gateway, USER, user_id, payload, UserUpdate, include=INCLUDE)
    except IntegrityError:
        return error_response(ValidationError(DUPLICATE_EMAIL))
    if is_error(user):
        return error_response(user)
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def delete_user(
    user_id: str = Path(..., description="The user ID"),
    gateway: Gateway = Depends(get_gateway),
):
    """Delete a user together with their feedbacks."""
    error = await delete_row(gateway, USER, user_id)
    if error is not None:
        return error_response(error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
