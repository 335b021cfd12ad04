from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Tuple


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class SubjectEntry:
    id: str = field(default_factory=_new_id)
    grade: str = ""
    credits: str = ""


@dataclass(frozen=True)
class Semester:
    id: str = field(default_factory=_new_id)
    title: str = ""
    subjects: Tuple[SubjectEntry, ...] = field(default_factory=lambda: (SubjectEntry(),))

    def with_title(self, title: str) -> Semester:
        return replace(self, title=title)

    def with_subject_added(self) -> Semester:
        return replace(self, subjects=self.subjects + (SubjectEntry(),))

    def with_subject_replaced(self, subject: SubjectEntry) -> Semester:
        subjects = tuple(subject if s.id == subject.id else s for s in self.subjects)
        return replace(self, subjects=subjects)

    def with_subject_removed(self, subject_id: str) -> Semester:
        if len(self.subjects) <= 1:
            return self
        return replace(self, subjects=tuple(s for s in self.subjects if s.id != subject_id))

    def find_subject(self, subject_id: str) -> SubjectEntry | None:
        return next((s for s in self.subjects if s.id == subject_id), None)
