"""Daily reflection: one short answer to a rotating question."""

from __future__ import annotations

from datetime import date
from typing import Optional

from rhythm.domains.wellbeing.models.wellbeing_models import ReflectionEntry
from rhythm.extensions import db

QUESTIONS = (
    "What did I control today?",
    "Where did I react badly?",
    "What did I do despite not wanting to?",
)
MAX_ANSWER_LENGTH = 300


def question_for(day: date) -> str:
    return QUESTIONS[day.timetuple().tm_yday % len(QUESTIONS)]


def get_entry(user_id: int, day: date) -> Optional[ReflectionEntry]:
    return ReflectionEntry.query.filter_by(user_id=user_id, date=day).first()


def save_entry(user_id: int, day: date, answer: str) -> ReflectionEntry:
    text = (answer or "").strip()
    if not text or len(text) > MAX_ANSWER_LENGTH:
        raise ValueError("validation_error")
    entry = get_entry(user_id, day)
    if entry:
        entry.answer = text
        entry.question = question_for(day)
    else:
        entry = ReflectionEntry(user_id=user_id, date=day, question=question_for(day), answer=text)
        db.session.add(entry)
    db.session.commit()
    return entry
