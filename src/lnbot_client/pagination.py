from __future__ import annotations

from dataclasses import dataclass

QueryParams = list[tuple[str, str]]


def query_params(**values: int | str | None) -> QueryParams:
    """Build query pairs in keyword order, leaving out ``None`` values."""
    return [(name, str(value)) for name, value in values.items() if value is not None]


@dataclass(frozen=True)
class ListParams:
    """Pagination for list endpoints.

    *limit* caps the page size, *after* continues from a previous result
    number. Either may be omitted; omitted members are not sent at all.
    """

    limit: int | None = None
    after: int | None = None

    def to_query(self) -> QueryParams:
        return query_params(limit=self.limit, after=self.after)
