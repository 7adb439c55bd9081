"""Message Use Cases: inbox, reading, and sending.

Invariants:
    - Only the recipient reads a message; reading flips is_read once
    - An authenticated sender's profile name/email replace whatever the form carried
    - Anonymous senders must give both name and email
    - Unread-count and mark-read failures degrade (logged), they never fail the request
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ResourceNotFoundError, ValidationError
from app.core.identity import Identity
from app.core.repository_protocols import MessageRepository, ProfileRepository
from app.infrastructure.message_repository import SQLMessageRepository
from app.infrastructure.user_repository import SQLProfileRepository
from app.models.message import Message
from app.schemas.message import MessageCreate

logger = logging.getLogger(__name__)


class MessageService:
    """Inbox use cases bound to one request's DB session."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.messages: MessageRepository = SQLMessageRepository(db)
        self.profiles: ProfileRepository = SQLProfileRepository(db)

    async def inbox(self, identity: Identity) -> tuple[list[Message], int]:
        messages = await self.messages.find_by_recipient(identity.profile_id)
        try:
            unread = await self.messages.count_unread(identity.profile_id)
        except SQLAlchemyError as e:
            logger.warning(
                f"Unread count unavailable: {e}",
                extra={"profile_id": identity.profile_id},
            )
            await self.db.rollback()
            unread = 0
        return messages, unread

    async def read_message(self, identity: Identity, message_id: UUID) -> Message:
        message = await self.messages.find_for_recipient(message_id, identity.profile_id)
        if message is None:
            raise ResourceNotFoundError("Message", str(message_id))
        if not message.is_read:
            try:
                await self.messages.mark_read(message.id)
                message.is_read = True
            except SQLAlchemyError as e:
                logger.warning(
                    f"Failed to mark message read: {e}",
                    extra={"message_id": message.id},
                )
                await self.db.rollback()
        return message

    async def send_message(
        self,
        sender: Identity | None,
        recipient_id: UUID,
        data: MessageCreate,
    ) -> Message:
        recipient = await self.profiles.find_by_id(recipient_id)
        if recipient is None:
            raise ResourceNotFoundError("Profile", str(recipient_id))

        sender_profile = None
        if sender is not None:
            sender_profile = await self.profiles.find_by_id(sender.profile_id)

        if sender_profile is not None:
            name = sender_profile.name or sender_profile.username or ""
            email = sender_profile.email or ""
        else:
            if not data.name or not data.email:
                raise ValidationError(
                    "Name and email are required to send a message", "name",
                )
            name, email = data.name, str(data.email)

        message = Message(
            sender_id=sender_profile.id if sender_profile else None,
            recipient_id=recipient.id,
            name=name,
            email=email,
            subject=data.subject,
            body=data.body,
        )
        await self.messages.create(message)
        logger.info(
            f"Message {message.id} sent to profile {recipient.id}",
            extra={"message_id": message.id, "profile_id": recipient.id},
        )
        return message
