"""Message Schemas: send form and inbox responses.

Invariants:
    - subject and body required
    - name/email optional in the form; required for anonymous senders (checked by the service)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class MessageCreate(BaseModel):
    name: str | None = Field(None, max_length=255)
    email: EmailStr | None = None
    subject: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1, max_length=10_000)


class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sender_id: UUID | None = None
    recipient_id: UUID
    name: str
    email: str
    subject: str
    body: str
    is_read: bool
    created_at: datetime
