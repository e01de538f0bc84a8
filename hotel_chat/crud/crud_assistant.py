from firebase_admin import firestore
from google.cloud.firestore_v1 import FieldFilter
from typing import List

from hotel_chat.models.guest import Assistant
import logging

logger = logging.getLogger(__name__)

ASSISTANTS_COLLECTION = "assistants"


async def get_assistants_by_hotel(
    db: firestore.AsyncClient, hotel: str
) -> List[Assistant]:
    """
    Retrieves all assistants working for the given hotel.
    """
    assistants = []
    query = db.collection(ASSISTANTS_COLLECTION).where(
        filter=FieldFilter("hotel", "==", hotel)
    )

    async for doc_snapshot in query.stream():
        if not doc_snapshot.exists:
            continue
        assistant_data = doc_snapshot.to_dict() or {}
        assistants.append(
            Assistant(
                id=doc_snapshot.id,
                hotel=assistant_data.get("hotel"),
                fcm_token=assistant_data.get("fcmToken"),
            )
        )
    return assistants


async def get_assistant_tokens_by_hotel(
    db: firestore.AsyncClient, hotel: str
) -> List[str]:
    """
    Returns the FCM tokens of the hotel's assistants.
    Assistants without a token are skipped.
    """
    tokens = []
    for assistant in await get_assistants_by_hotel(db, hotel):
        if assistant.fcm_token:
            tokens.append(assistant.fcm_token)
        else:
            logger.debug(f"Assistant {assistant.id} of {hotel} has no FCM token, skipping.")
    return tokens
