# peertutor/subjects.py

import logging
import re
from typing import List, Optional

from .data import SEED_SUBJECTS
from .errors import ValidationError
from .schemas import SubjectCategory, SubjectRecord
from .store import TutorStore

logger = logging.getLogger(__name__)


def slugify(name: str) -> str:
    """'Algebra 1 EOC' -> 'algebra-1-eoc'"""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def add_subject(
    store: TutorStore,
    name: str,
    category: SubjectCategory = SubjectCategory.core,
    icon: str = "book-open",
    badge: Optional[str] = None,
) -> SubjectRecord:
    name = (name or "").strip()
    subject_id = slugify(name)
    if not subject_id:
        raise ValidationError("Subject name must contain letters or digits")

    subject = store.put_subject(
        SubjectRecord(id=subject_id, name=name, category=category, icon=icon, badge=badge)
    )
    logger.info("Saved subject %s (%s)", subject.name, subject.id)
    return subject


def seed_subjects(store: TutorStore) -> List[SubjectRecord]:
    return [store.put_subject(SubjectRecord(**entry)) for entry in SEED_SUBJECTS]
