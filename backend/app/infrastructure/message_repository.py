"""Message Repository: SQLAlchemy persistence for inbox messages.

Invariants:
    - Every lookup is scoped by recipient; a message is only visible to its recipient
    - Inbox order: unread first, then newest first
"""

from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.models.message import Message


class SQLMessageRepository:
    """Inbox messages."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, message: Message) -> None:
        self.db.add(message)
        await self.db.commit()

    async def find_by_recipient(self, recipient_id: UUID) -> list[Message]:
        result = await self.db.execute(
            select(Message)
            .where(Message.recipient_id == recipient_id)
            .options(joinedload(Message.sender))
            .order_by(Message.is_read.asc(), Message.created_at.desc()),
        )
        return list(result.scalars().all())

    async def find_for_recipient(
        self, message_id: UUID, recipient_id: UUID,
    ) -> Message | None:
        result = await self.db.execute(
            select(Message)
            .where(Message.id == message_id)
            .where(Message.recipient_id == recipient_id)
            .options(joinedload(Message.sender)),
        )
        return result.scalar_one_or_none()

    async def mark_read(self, message_id: UUID) -> None:
        await self.db.execute(
            update(Message)
            .where(Message.id == message_id)
            .values(is_read=True)
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()

    async def count_unread(self, recipient_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Message)
            .where(Message.recipient_id == recipient_id)
            .where(Message.is_read.is_(False)),
        )
        return result.scalar_one()
