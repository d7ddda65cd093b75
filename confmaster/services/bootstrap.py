"""Idempotent first-start seeding.

Runs once at process start. Nothing is written when an admin account already
exists, so restarting the service never duplicates the seed.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.orm import Session

from confmaster.core.config import Settings, settings
from confmaster.core.logging import get_logger
from confmaster.core.security import hash_password
from confmaster.models import Conference, ScheduleItem, User
from confmaster.services.workflow.models import Role

logger = get_logger(__name__)


@dataclass(frozen=True)
class SeedUser:
    email: str
    password: str
    name: str
    role: Role = Role.USER
    affiliation: str | None = None
    bio: str | None = None


@dataclass(frozen=True)
class SeedScheduleItem:
    title: str
    start_time: dt.time
    end_time: dt.time
    room: str | None = None


@dataclass(frozen=True)
class SeedConference:
    title: str
    description: str | None = None
    date: dt.date | None = None
    location: str | None = None
    schedule: tuple[SeedScheduleItem, ...] = ()


@dataclass(frozen=True)
class SeedData:
    users: tuple[SeedUser, ...]
    conferences: tuple[SeedConference, ...] = field(default_factory=tuple)


DEMO_USERS = (
    SeedUser(
        email="user@example.com",
        password="user123",
        name="John Doe",
        affiliation="Stanford University",
        bio="PhD student focusing on Natural Language Processing and Large Language Models.",
    ),
    SeedUser(
        email="researcher@uni.edu",
        password="user123",
        name="Dr. Sarah Smith",
        affiliation="MIT Media Lab",
        bio="Senior researcher in Human-Computer Interaction and ubiquitous computing.",
    ),
    SeedUser(
        email="reviewer@science.org",
        password="user123",
        name="Prof. Alan Turing",
        role=Role.ADMIN,
        affiliation="University of Cambridge",
        bio="Expert in computational theory and artificial intelligence.",
    ),
)

DEMO_CONFERENCES = (
    SeedConference(
        title="International AI Conference 2026",
        description="A premier conference on Artificial Intelligence and Machine Learning.",
        date=dt.date(2026, 6, 15),
        location="San Francisco, CA",
        schedule=(
            SeedScheduleItem("Opening Keynote: The Future of AGI", dt.time(9, 0), dt.time(10, 30), "Grand Ballroom"),
            SeedScheduleItem("Neural Architecture Search Workshop", dt.time(11, 0), dt.time(12, 30), "Room 302"),
        ),
    ),
    SeedConference(
        title="Global Sustainability Summit",
        description="Focusing on renewable energy and green technologies.",
        date=dt.date(2026, 9, 20),
        location="Berlin, Germany",
    ),
)


def default_seed(cfg: Settings = settings) -> SeedData:
    admin = SeedUser(
        email=cfg.bootstrap_admin_email,
        password=cfg.bootstrap_admin_password,
        name=cfg.bootstrap_admin_name,
        role=Role.ADMIN,
    )
    if not cfg.seed_demo_data:
        return SeedData(users=(admin,))
    return SeedData(users=(admin, *DEMO_USERS), conferences=DEMO_CONFERENCES)


def bootstrap(db: Session, seed: SeedData) -> bool:
    """Insert the seed unless an admin exists. Returns True when it wrote."""
    if db.scalar(select(User.id).where(User.role == Role.ADMIN.value).limit(1)) is not None:
        logger.info("bootstrap skipped, admin already present")
        return False
    if not any(u.role == Role.ADMIN for u in seed.users):
        logger.warning("seed data has no admin account; bootstrap will run again on next start")

    seen: set[str] = set()
    for seed_user in seed.users:
        email = seed_user.email.strip().lower()
        # first entry wins, so a configured admin beats a demo account with the same email
        if email in seen or db.scalar(select(User.id).where(User.email == email)) is not None:
            continue
        seen.add(email)
        db.add(
            User(
                email=email,
                password_hash=hash_password(seed_user.password),
                name=seed_user.name,
                role=seed_user.role.value,
                affiliation=seed_user.affiliation,
                bio=seed_user.bio,
            )
        )

    for seed_conf in seed.conferences:
        conference = Conference(
            title=seed_conf.title,
            description=seed_conf.description,
            date=seed_conf.date,
            location=seed_conf.location,
        )
        db.add(conference)
        db.flush()
        for item in seed_conf.schedule:
            db.add(
                ScheduleItem(
                    conference_id=conference.id,
                    title=item.title,
                    start_time=item.start_time,
                    end_time=item.end_time,
                    room=item.room,
                )
            )

    db.commit()
    logger.info(
        "bootstrap complete",
        extra={"fields": {"users": len(seed.users), "conferences": len(seed.conferences)}},
    )
    return True
