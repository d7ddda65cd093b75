import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from confmaster.api.deps import get_caller
from confmaster.db.session import get_db
from confmaster.schemas.common import CreatedResponse
from confmaster.schemas.conference import ConferenceCreate, ConferenceRead, ScheduleItemRead
from confmaster.services import conferences
from confmaster.services.workflow import Caller

router = APIRouter(prefix="/conferences", tags=["conferences"])


@router.get("", response_model=list[ConferenceRead])
def list_conferences(db: Session = Depends(get_db)):
    return conferences.list_conferences(db)


@router.post("", response_model=CreatedResponse)
def create_conference(
    payload: ConferenceCreate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    conference = conferences.create_conference(
        db,
        caller,
        title=payload.title,
        description=payload.description,
        date=payload.date,
        location=payload.location,
    )
    return CreatedResponse(id=conference.id)


@router.get("/{conference_id}/schedule", response_model=list[ScheduleItemRead])
def get_schedule(conference_id: uuid.UUID, db: Session = Depends(get_db)):
    return conferences.get_schedule(db, conference_id)
