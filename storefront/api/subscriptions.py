"""Subscription API endpoints."""

from fastapi import APIRouter, Response, status

from storefront.api.dependencies import SubscriptionServiceDep
from storefront.api.schemas import ErrorResponse, SubscribeRequest

router = APIRouter(tags=["Subscriptions"])


@router.post(
    "/subscribe",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Subscribe",
    description="Record an email address for the newsletter.",
)
async def subscribe(request: SubscribeRequest, service: SubscriptionServiceDep) -> Response:
    await service.subscribe(request.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
