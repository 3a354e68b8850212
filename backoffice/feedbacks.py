# backoffice/feedbacks.py
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Response, status

from .crud import ERROR_RESPONSES, create_row, delete_row, get_row, list_rows, update_body, update_row
from .database import Gateway, get_gateway
from .errors import error_response, is_error
from .schemas import FeedbackCreate, FeedbackOut, FeedbackUpdate
from .validators import FEEDBACK

router = APIRouter(prefix="/api/feedbacks", tags=["feedbacks"], responses={500: ERROR_RESPONSES[500]})

INCLUDE = ("author", "product")


@router.get("", response_model=List[FeedbackOut])
async def list_feedbacks(gateway: Gateway = Depends(get_gateway)):
    """Returns all feedbacks with their author and product."""
    return await list_rows(gateway, FEEDBACK, include=INCLUDE)


@router.get("/{feedback_id}", response_model=FeedbackOut, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def get_feedback(
    feedback_id: str = Path(..., description="The feedback ID"),
    gateway: Gateway = Depends(get_gateway),
):
    feedback = await get_row(gateway, FEEDBACK, feedback_id, include=INCLUDE)
    if is_error(feedback):
        return error_response(feedback)
    return feedback


@router.post("", response_model=FeedbackOut, status_code=status.HTTP_201_CREATED, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def create_feedback(payload: FeedbackCreate, gateway: Gateway = Depends(get_gateway)):
    """Create a feedback. Rating is 0-5; author and product must exist."""
    feedback = await create_row(gateway, FEEDBACK, payload.model_dump(), include=INCLUDE)
    if is_error(feedback):
        return error_response(feedback)
    return feedback


@router.put("/{feedback_id}", response_model=FeedbackOut, openapi_extra=update_body(FeedbackUpdate), responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def update_feedback(
    payload: Any = Body(...),
    feedback_id: str = Path(..., description="The feedback ID"),
    gateway: Gateway = Depends(get_gateway),
):
    feedback = await update_row(gateway, FEEDBACK, feedback_id, payload, FeedbackUpdate, include=INCLUDE)
    if is_error(feedback):
        return error_response(feedback)
    return feedback


@router.delete("/{feedback_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]})
async def delete_feedback(
    feedback_id: str = Path(..., description="The feedback ID"),
    gateway: Gateway = Depends(get_gateway),
):
    error = await delete_row(gateway, FEEDBACK, feedback_id)
    if error is not None:
        return error_response(error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
