# backoffice/products.py
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Response, status

from .crud import ERROR_RESPONSES, create_row, delete_row, get_row, list_rows, update_body, update_row
from .database import Gateway, get_gateway
from .errors import error_response, is_error
from .schemas import ProductCreate, ProductOut, ProductUpdate
from .validators import PRODUCT

router = APIRouter(prefix="/api/products", tags=["products"], responses={500: ERROR_RESPONSES[500]})

INCLUDE = ("category", "feedbacks")


@router.get("", response_model=List[ProductOut])
async def list_products(gateway: Gateway = Depends(get_gateway)):
    """Returns all products with their category and feedbacks."""
    return await list_rows(gateway, PRODUCT, include=INCLUDE)


@router.get("/{product_id}", response_model=ProductOut, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def get_product(
    product_id: str = Path(..., description="The product ID"),
    gateway: Gateway = Depends(get_gateway),
):
    product = await get_row(gateway, PRODUCT, product_id, include=INCLUDE)
    if is_error(product):
        return error_response(product)
    return product


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def create_product(payload: ProductCreate, gateway: Gateway = Depends(get_gateway)):
    """Create a product. `categoryId` must reference an existing category."""
    product = await create_row(gateway, PRODUCT, payload.model_dump(), include=INCLUDE)
    if is_error(product):
        return error_response(product)
    return product


@router.put("/{product_id}", response_model=ProductOut, openapi_extra=update_body(ProductUpdate), responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def update_product(
    payload: Any = Body(...),
    product_id: str = Path(..., description="The product ID"),
    gateway: Gateway = Depends(get_gateway),
):
    """Update the fields sent in the body; omitted fields keep their value."""
    product = await update_row(gateway, PRODUCT, product_id, payload, ProductUpdate, include=INCLUDE)
    if is_error(product):
        return error_response(product)
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def delete_product(
    product_id: str = Path(..., description="The product ID"),
    gateway: Gateway = Depends(get_gateway),
):
    """Delete a product together with its feedbacks."""
    error = await delete_row(gateway, PRODUCT, product_id)
    if error is not None:
        return error_response(error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
