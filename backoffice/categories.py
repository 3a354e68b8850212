# backoffice/categories.py
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Response, status

from .crud import ERROR_RESPONSES, create_row, delete_row, get_row, list_rows, update_body, update_row
from .database import Gateway, get_gateway
from .errors import error_response, is_error
from .schemas import CategoryCreate, CategoryOut, CategoryUpdate
from .validators import CATEGORY

router = APIRouter(prefix="/api/categories", tags=["categories"], responses={500: ERROR_RESPONSES[500]})


@router.get("", response_model=List[CategoryOut])
async def list_categories(gateway: Gateway = Depends(get_gateway)):
    """Returns all categories."""
    return await list_rows(gateway, CATEGORY)


@router.get("/{category_id}", response_model=CategoryOut, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def get_category(
    category_id: str = Path(..., description="The category ID"),
    gateway: Gateway = Depends(get_gateway),
):
    category = await get_row(gateway, CATEGORY, category_id)
    if is_error(category):
        return error_response(category)
    return category


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED, responses={400: ERROR_RESPONSES[400]})
async def create_category(payload: CategoryCreate, gateway: Gateway = Depends(get_gateway)):
    category = await create_row(gateway, CATEGORY, payload.model_dump())
    if is_error(category):
        return error_response(category)
    return category


@router.put("/{category_id}", response_model=CategoryOut, openapi_extra=update_body(CategoryUpdate), responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def update_category(
    payload: Any = Body(...),
    category_id: str = Path(..., description="The category ID"),
    gateway: Gateway = Depends(get_gateway),
):
    category = await update_row(gateway, CATEGORY, category_id, payload, CategoryUpdate)
    if is_error(category):
        return error_response(category)
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def delete_category(
    category_id: str = Path(..., description="The category ID"),
    gateway: Gateway = Depends(get_gateway),
):
    """Delete a category. Fails in the store while products still reference it."""
    error = await delete_row(gateway, CATEGORY, category_id)
    if error is not None:
        return error_response(error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
