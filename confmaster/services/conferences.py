from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from confmaster.core.errors import ValidationFailed
from confmaster.core.logging import get_logger
from confmaster.models import Conference, ScheduleItem
from confmaster.services.workflow import policy
from confmaster.services.workflow.models import Caller

logger = get_logger(__name__)


def list_conferences(db: Session) -> list[Conference]:
    stmt = select(Conference).order_by(Conference.date.is_(None), Conference.date, Conference.title)
    return list(db.scalars(stmt))


def create_conference(
    db: Session,
    caller: Caller,
    *,
    title: str,
    description: str | None = None,
    date: dt.date | None = None,
    location: str | None = None,
) -> Conference:
    policy.require_admin(caller)
    title = (title or "").strip()
    if not title:
        raise ValidationFailed("title is required")
    conference = Conference(title=title, description=description, date=date, location=location)
    db.add(conference)
    db.commit()
    logger.info("conference created", extra={"fields": {"conference_id": conference.id}})
    return conference


def get_schedule(db: Session, conference_id: uuid.UUID) -> list[ScheduleItem]:
    stmt = (
        select(ScheduleItem)
        .where(ScheduleItem.conference_id == conference_id)
        .order_by(ScheduleItem.start_time, ScheduleItem.title)
    )
    return list(db.scalars(stmt))
