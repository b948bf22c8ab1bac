"""Music search filter composition.

Turns a MusicSearchCriteria into one SQLAlchemy boolean expression: the AND
of whichever sub-conditions are present. Absent (or blank) criteria add no
constraint, so empty criteria match every music.
"""

from sqlalchemy import ColumnElement, String, and_, func, true

from music_api.application.dtos.music import MusicSearchCriteria
from music_api.infrastructure.persistence.models.music import Music


def _has_text(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def music_filter_conditions(criteria: MusicSearchCriteria) -> list[ColumnElement[bool]]:
    """Return the individual conditions for the criteria that are set.

    - name: case-insensitive substring (LIKE wildcards in the input match literally)
    - genre: case-insensitive exact match
    - author_id: exact match on the owning author
    - min_duration / max_duration: inclusive bounds, each optional
    """
    conditions: list[ColumnElement[bool]] = []
    if _has_text(criteria.name):
        conditions.append(
            func.lower(Music.name, type_=String).contains(
                criteria.name.lower(), autoescape=True
            )
        )
    if _has_text(criteria.genre):
        conditions.append(func.lower(Music.genre) == criteria.genre.lower())
    if criteria.author_id is not None:
        conditions.append(Music.author_id == criteria.author_id)
    if criteria.min_duration is not None:
        conditions.append(Music.duration_seconds >= criteria.min_duration)
    if criteria.max_duration is not None:
        conditions.append(Music.duration_seconds <= criteria.max_duration)
    return conditions


def build_music_filter(criteria: MusicSearchCriteria) -> ColumnElement[bool]:
    """Combine the criteria into a single predicate (true() when nothing is set)."""
    conditions = music_filter_conditions(criteria)
    if not conditions:
        return true()
    return and_(*conditions)
