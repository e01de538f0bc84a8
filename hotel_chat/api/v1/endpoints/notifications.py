from fastapi import APIRouter, Body, Depends, HTTPException, status
from typing import Optional
from firebase_admin import firestore
import logging

from hotel_chat.api.deps import get_db, get_push_service
from hotel_chat.crud import crud_assistant, crud_guest, crud_guest_token
from hotel_chat.models.notification import NotifyRequest, NotifyResponse
from hotel_chat.services.notification_service import (
    PushNotificationService,
    count_successes,
)

router = APIRouter()
logger = logging.getLogger(__name__)

GUEST_REPLY_TITLE = "Assistant replied"
GUEST_ROLE = "guest"


def _require_fields(request: Optional[NotifyRequest]) -> NotifyRequest:
    # An empty body counts as every field missing
    if request is None or not request.is_complete():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing guestEmail or message",
        )
    return request


@router.post("/notify-assistants", response_model=NotifyResponse)
async def notify_assistants(
    request: Optional[NotifyRequest] = Body(None),
    db: firestore.AsyncClient = Depends(get_db),
    push_service: PushNotificationService = Depends(get_push_service),
):
    """
    Notifies every assistant of the guest's hotel about a new guest message.
    Responds 200 once all dispatches settled; `sent` counts the successful ones.
    """
    logger.info("Received POST /notify-assistants")
    request = _require_fields(request)

    try:
        guest = await crud_guest.get_guest(db, request.guest_email)
        if guest is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Guest not found"
            )
        if not guest.hotel:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Hotel not set for guest",
            )

        tokens = await crud_assistant.get_assistant_tokens_by_hotel(db, guest.hotel)
        if not tokens:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No assistants with valid FCM tokens",
            )

        outcomes = await push_service.send_to_tokens(
            tokens,
            title=f"New message from {guest.name or request.guest_email}",
            body=request.message,
            data={"guestEmail": request.guest_email, "hotel": str(guest.hotel)},
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error notifying assistants: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )

    sent = count_successes(outcomes)
    logger.info(f"Notification sent to assistants: {sent}/{len(outcomes)}")
    return NotifyResponse(sent=sent)


@router.post("/notify-guest", response_model=NotifyResponse)
async def notify_guest(
    request: Optional[NotifyRequest] = Body(None),
    db: firestore.AsyncClient = Depends(get_db),
    push_service: PushNotificationService = Depends(get_push_service),
):
    """
    Notifies every registered device of the guest that an assistant replied.
    """
    logger.info("Received POST /notify-guest")
    request = _require_fields(request)

    try:
        tokens = await crud_guest_token.get_tokens_by_email(db, request.guest_email)
        if not tokens:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No guest FCM tokens found",
            )

        outcomes = await push_service.send_to_tokens(
            tokens,
            title=GUEST_REPLY_TITLE,
            body=request.message,
            data={"guestEmail": request.guest_email, "role": GUEST_ROLE},
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error notifying guest: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )

    sent = count_successes(outcomes)
    logger.info(f"Notification sent to guest: {sent}/{len(outcomes)}")
    return NotifyResponse(sent=sent)
