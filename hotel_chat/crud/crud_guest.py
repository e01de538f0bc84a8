from firebase_admin import firestore
from typing import Optional

from hotel_chat.models.guest import Guest

GUESTS_COLLECTION = "guests"


async def get_guest(db: firestore.AsyncClient, email: str) -> Optional[Guest]:
    """
    Retrieves a guest by email.
    The email is the document ID in the guests collection.
    """
    doc_ref = db.collection(GUESTS_COLLECTION).document(email)
    doc_snapshot = await doc_ref.get()

    if not doc_snapshot.exists:
        return None

    guest_data = doc_snapshot.to_dict() or {}
    return Guest(
        email=doc_snapshot.id,
        name=guest_data.get("name"),
        hotel=guest_data.get("hotel"),
    )
