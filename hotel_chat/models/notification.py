from pydantic import BaseModel, Field
from typing import Optional


class NotifyRequest(BaseModel):
    guest_email: Optional[str] = Field(None, alias="guestEmail")
    message: Optional[str] = None

    class Config:
        populate_by_name = True

    def is_complete(self) -> bool:
        return bool(self.guest_email) and bool(self.message)


class NotifyResponse(BaseModel):
    success: bool = True
    sent: int = Field(..., description="Number of push notifications delivered")


class DispatchOutcome(BaseModel):
    # Result of one push dispatch; never persisted, only aggregated per request.
    token: str
    success: bool
    error: Optional[str] = None
