from fastapi import APIRouter, Body, Depends, HTTPException, status
from typing import Optional
import logging

from hotel_chat.api.deps import get_email_service
from hotel_chat.models.check_in import CheckInEmailRequest, SuccessResponse
from hotel_chat.services.email_service import EmailDeliveryError, EmailService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/send-email", response_model=SuccessResponse, status_code=status.HTTP_200_OK)
async def send_check_in_email(
    request: Optional[CheckInEmailRequest] = Body(None),
    email_service: EmailService = Depends(get_email_service),
):
    """
    Sends the check-in email with the verification deep link to the guest.
    Every call sends a new email; duplicates are not suppressed.
    """
    # An empty body counts as every field missing
    if request is None:
        request = CheckInEmailRequest()
    if request.missing_fields():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields"
        )

    try:
        await email_service.send_check_in_email(
            name=request.name,
            email=request.email,
            room=request.room,
            hotel=request.hotel,
        )
    except EmailDeliveryError as e:
        logger.error(f"Email send error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Email send failed",
        )

    return SuccessResponse()
