"""
Client-side search over the records of one level.

A record matches if the query is a case-insensitive substring of its title
or its description. Only the empty query matches everything; whitespace is
part of the query like any other character. Input order is kept and the
input sequence is never modified.
"""

from __future__ import annotations

from typing import Any, Sequence


def _matches(record: Any, needle: str) -> bool:
    title = (getattr(record, "title", "") or "").lower()
    if needle in title:
        return True
    description = getattr(record, "description", None)
    return bool(description) and needle in description.lower()


def filter_records(records: Sequence[Any], query: str) -> list[Any]:
    if query == "":
        return list(records)
    needle = query.lower()
    return [r for r in records if _matches(r, needle)]
