#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Search across a collection of notes.

Storage belongs to the host application, so notes and projects are duck
typed: anything with the attributes of :class:`NoteLike` or
:class:`ProjectLike` works.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence, TypeVar

from notelens.constants import SHORT_NOTE_TITLE_LENGTH
from notelens.search.query import Matcher


class NoteLike(Protocol):
    """Minimal shape of a note as seen by search."""

    id: str
    content: str
    title: str | None
    type: str


class ProjectLike(Protocol):
    """Minimal shape of a project as seen by search."""

    id: str
    name: str


NoteT = TypeVar("NoteT", bound=NoteLike)

TEXT_NOTE_TYPE = "text"


@dataclass(frozen=True)
class TieredResults:
    """Global search results, highest priority tier first."""

    projects: Sequence[ProjectLike] = field(default_factory=tuple)
    titles: Sequence[NoteLike] = field(default_factory=tuple)
    content: Sequence[NoteLike] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not (self.projects or self.titles or self.content)


def filter_notes(notes: Iterable[NoteT], matcher: Matcher) -> list[NoteT]:
    """Keep notes whose content has at least one match.

    The empty query keeps every note, so clearing the find box restores the
    full list.
    """
    if matcher.matches_nothing:
        return list(notes)
    return [note for note in notes if matcher.search(note.content)]


def tiered_search(
    projects: Iterable[ProjectLike],
    notes: Iterable[NoteLike],
    text: str,
) -> TieredResults | None:
    """Case-insensitive global search ranked by where the text was found.

    Parameters
    ----------
    projects : iterable of ProjectLike
        Candidate projects; matched on name.
    notes : iterable of NoteLike
        Candidate notes.
    text : str
        Query text, matched as a plain substring.

    Returns
    -------
    TieredResults or None
        None for empty query text. Otherwise three tiers: project names; note
        titles (file/image notes by title, short text notes by first line);
        and note bodies not already listed as titles.

    """
    if not text:
        return None

    needle = text.lower()
    notes = list(notes)

    matched_projects = [project for project in projects if needle in project.name.lower()]
    matched_titles = [note for note in notes if _title_matches(note, needle)]
    title_ids = {note.id for note in matched_titles}
    matched_content = [
        note for note in notes if note.id not in title_ids and needle in (note.content or "").lower()
    ]

    return TieredResults(
        projects=tuple(matched_projects),
        titles=tuple(matched_titles),
        content=tuple(matched_content),
    )


def _title_matches(note: NoteLike, needle: str) -> bool:
    if _type_name(note) != TEXT_NOTE_TYPE:
        return bool(note.title) and needle in (note.title or "").lower()
    # Short text notes act as their own title
    content = note.content or ""
    first_line = content.split("\n", 1)[0]
    return needle in first_line.lower() and len(content) < SHORT_NOTE_TITLE_LENGTH


def _type_name(note: NoteLike) -> str:
    note_type = getattr(note, "type", TEXT_NOTE_TYPE)
    return str(getattr(note_type, "value", note_type))


__all__ = ["NoteLike", "ProjectLike", "TieredResults", "filter_notes", "tiered_search"]
