"""Application pagination – PageRequest."""
from __future__ import annotations

import dataclasses

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 1000


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based pagination parameters.

    Out-of-range input is corrected rather than rejected: a page below 1
    becomes 1, a non-positive size becomes ``default_size`` and a size above
    ``max_size`` is capped.
    """

    page: int = 1
    size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def of(
        cls,
        page: int | None,
        size: int | None,
        *,
        default_size: int = DEFAULT_PAGE_SIZE,
        max_size: int | None = MAX_PAGE_SIZE,
    ) -> PageRequest:
        page = page if page is not None and page > 0 else 1
        size = size if size is not None and size > 0 else default_size
        if max_size is not None and size > max_size:
            size = max_size
        return cls(page=page, size=size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


__all__ = ["DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "PageRequest"]
