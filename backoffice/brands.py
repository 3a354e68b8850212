# backoffice/brands.py
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Response, status

from .crud import ERROR_RESPONSES, create_row, delete_row, get_row, list_rows, update_body, update_row
from .database import Gateway, get_gateway
from .errors import error_response, is_error
from .schemas import BrandCreate, BrandOut, BrandUpdate
from .validators import BRAND

router = APIRouter(prefix="/api/brands", tags=["brands"], responses={500: ERROR_RESPONSES[500]})


@router.get("", response_model=List[BrandOut])
async def list_brands(gateway: Gateway = Depends(get_gateway)):
    return await list_rows(gateway, BRAND)


@router.get("/{brand_id}", response_model=BrandOut, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def get_brand(
    brand_id: str = Path(..., description="The brand ID"),
    gateway: Gateway = Depends(get_gateway),
):
    brand = await get_row(gateway, BRAND, brand_id)
    if is_error(brand):
        return error_response(brand)
    return brand


@router.post("", response_model=BrandOut, status_code=status.HTTP_201_CREATED, responses={400: ERROR_RESPONSES[400]})
async def create_brand(payload: BrandCreate, gateway: Gateway = Depends(get_gateway)):
    brand = await create_row(gateway, BRAND, payload.model_dump())
    if is_error(brand):
        return error_response(brand)
    return brand


@router.put("/{brand_id}", response_model=BrandOut, openapi_extra=update_body(BrandUpdate), responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def update_brand(
    payload: Any = Body(...),
    brand_id: str = Path(..., description="The brand ID"),
    gateway: Gateway = Depends(get_gateway),
):
    brand = await update_row(gateway, BRAND, brand_id, payload, BrandUpdate)
    if is_error(brand):
        return error_response(brand)
    return brand


@router.delete("/{brand_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def delete_brand(
    brand_id: str = Path(..., description="The brand ID"),
    gateway: Gateway = Depends(get_gateway),
):
    error = await delete_row(gateway, BRAND, brand_id)
    if error is not None:
        return error_response(error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
