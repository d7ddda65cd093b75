"""Models package - imports every table so Base.metadata is complete."""
from confmaster.models.conference import Conference
from confmaster.models.document import Document
from confmaster.models.review import Review
from confmaster.models.schedule_item import ScheduleItem
from confmaster.models.submission import Submission
from confmaster.models.user import User

__all__ = ["Conference", "Document", "Review", "ScheduleItem", "Submission", "User"]
