from pydantic import BaseModel
from typing import Optional, Union


class CheckInEmailRequest(BaseModel):
    # All fields are required, but presence is checked by the endpoint so that
    # a missing field yields the same 400 response as an empty (or zero) one.
    name: Optional[str] = None
    email: Optional[str] = None
    room: Optional[Union[str, int]] = None
    hotel: Optional[str] = None

    def missing_fields(self) -> list:
        return [
            field
            for field in ("name", "email", "room", "hotel")
            if not getattr(self, field)
        ]


class SuccessResponse(BaseModel):
    success: bool = True
