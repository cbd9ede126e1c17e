"""Audit log DTOs, query parsing and pagination."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field

DEFAULT_PAGE_SIZE = 25
FILTER_KEYS = ("operation", "resource_type", "status", "resource_id", "from_date", "to_date")


class AuditLogEntry(BaseModel):
    id: str
    user_id: str
    username: str
    operation: str
    resource_type: str
    resource_id: Optional[str] = None
    status: str
    request_body: Optional[Dict[str, Any]] = None
    response_status: Optional[str] = None
    error_message: Optional[str] = None
    created_at: str


class AuditLogResponse(BaseModel):
    success: bool = True
    data: List[AuditLogEntry] = []
    total: int = 0
    skip: int = 0
    limit: int = DEFAULT_PAGE_SIZE


class AuditQuery(BaseModel):
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=100)
    operation: Optional[str] = None
    resource_type: Optional[str] = None
    status: Optional[str] = None
    resource_id: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    sort_order: Literal["asc", "desc"] = "desc"

    @classmethod
    def from_args(cls, args: Mapping[str, str], limit: int = DEFAULT_PAGE_SIZE) -> "AuditQuery":
        """Lenient parse of page query-string args; "all" means no filter."""
        try:
            skip = max(int(args.get("skip") or 0), 0)
        except ValueError:
            skip = 0
        filters: Dict[str, Optional[str]] = {}
        for key in FILTER_KEYS:
            value = (args.get(key) or "").strip()
            filters[key] = value if value and value != "all" else None
        sort_order = args.get("sort_order")
        return cls(
            skip=skip,
            limit=limit,
            sort_order=sort_order if sort_order in ("asc", "desc") else "desc",
            **filters,
        )

    def to_params(self) -> Dict[str, str]:
        """Only non-empty values go on the wire."""
        params = {}
        for key, value in self.model_dump().items():
            if value is not None and value != "":
                params[key] = str(value)
        return params


class AuditPage(BaseModel):
    """Pagination figures for one page of results."""

    skip: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return max(math.ceil(self.total / self.limit), 1)

    @property
    def current_page(self) -> int:
        return min(self.skip // self.limit + 1, self.total_pages)

    @property
    def next_skip(self) -> int:
        return self.skip + self.limit

    @property
    def prev_skip(self) -> int:
        return max(self.skip - self.limit, 0)

    @property
    def last_page_skip(self) -> int:
        return max((math.ceil(self.total / self.limit) - 1) * self.limit, 0)

    @property
    def is_first_page(self) -> bool:
        return self.skip == 0

    @property
    def is_last_page(self) -> bool:
        return self.skip >= self.last_page_skip
