from pydantic import BaseModel, Field
from typing import Optional


class Guest(BaseModel):
    # The document ID in Firestore is the guest's email address.
    email: str = Field(..., description="Guest email, the document ID in 'guests'")
    name: Optional[str] = Field(None, description="Display name of the guest")
    hotel: Optional[str] = Field(None, description="Hotel the guest is checked in to")


class Assistant(BaseModel):
    id: str = Field(..., description="Firestore document ID of the assistant")
    hotel: Optional[str] = Field(None, description="Hotel the assistant works for")
    # Firestore field name is "fcmToken"
    fcm_token: Optional[str] = Field(
        None, alias="fcmToken", description="FCM registration token of the assistant's device"
    )

    class Config:
        populate_by_name = True

