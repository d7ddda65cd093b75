import uuid
from datetime import time

from sqlalchemy import ForeignKey, String, Time, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from confmaster.db.base import Base


class ScheduleItem(Base):
    __tablename__ = "schedule"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    conference_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("conferences.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    room: Mapped[str | None] = mapped_column(String(100), nullable=True)
