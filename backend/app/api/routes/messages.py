"""Message Routes: the caller's inbox and the public contact form."""

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_identity, get_optional_identity
from app.core.domain_types import FlashLevel
from app.core.flash import with_flash
from app.core.identity import Identity
from app.infrastructure.database import get_db
from app.schemas.message import MessageCreate, MessageOut
from app.services.message_service import MessageService


async def inbox(
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    messages, unread = await MessageService(db).inbox(identity)
    return {
        "messages": [MessageOut.model_validate(m).model_dump(mode="json") for m in messages],
        "unread_count": unread,
    }


async def read_message(
    message_id: UUID,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    message = await MessageService(db).read_message(identity, message_id)
    return MessageOut.model_validate(message).model_dump(mode="json")


async def send_message(
    profile_id: UUID,
    body: MessageCreate,
    identity: Identity | None = Depends(get_optional_identity),
    db: AsyncSession = Depends(get_db),
):
    message = await MessageService(db).send_message(identity, profile_id, body)
    return with_flash(
        {"message": MessageOut.model_validate(message).model_dump(mode="json")},
        FlashLevel.SUCCESS,
        "Your message was successfully sent!",
    )
