from firebase_admin import firestore
from google.cloud.firestore_v1 import FieldFilter
from typing import List

GUEST_TOKENS_COLLECTION = "guest_tokens"


async def get_tokens_by_email(db: firestore.AsyncClient, email: str) -> List[str]:
    """
    Retrieves every FCM token registered by a guest.
    The token is the document ID in the guest_tokens collection.
    """
    query = db.collection(GUEST_TOKENS_COLLECTION).where(
        filter=FieldFilter("email", "==", email)
    )
    return [doc_snapshot.id async for doc_snapshot in query.stream()]
