"""Search helpers for the GUI.

Filtering is synchronous and side-effect free, so views can recompute it on
every render.
"""

from __future__ import annotations

from typing import Iterable, List

from personal_info.models.schemas import PersonalInfoSchema

SEARCH_FIELDS = ("first_name", "last_name", "city")


def matches(record: PersonalInfoSchema, query: str) -> bool:
    needle = query.lower()
    return any(needle in getattr(record, name).lower() for name in SEARCH_FIELDS)


def filter_records(records: Iterable[PersonalInfoSchema], query: str) -> List[PersonalInfoSchema]:
    """Records whose first name, last name or city contains `query`.

    Case-insensitive; keeps the input order. An empty query returns every
    record.
    """
    if not query:
        return list(records)
    return [r for r in records if matches(r, query)]
