from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Optional, List


USER_COLUMNS = ("id", "name", "age", "country", "degree", "status", "site")


@dataclass
class User:
    id: Optional[int]
    name: str
    age: int
    country: str
    degree: Optional[str] = None
    status: Optional[str] = None
    site: Optional[str] = None

    def same_as(self, other: "User") -> bool:
        """Field-wise equality ignoring the store-assigned id."""
        return all(
            getattr(self, f.name) == getattr(other, f.name)
            for f in fields(self)
            if f.name != "id"
        )

    def to_dict(self) -> dict:
        return {c: getattr(self, c) for c in USER_COLUMNS}


@dataclass
class Filters:
    """Equality filters for paginate. Empty values mean "no constraint"."""
    status: Optional[str] = None
    countries: List[str] = field(default_factory=list)
    age: int = 0
    degree: Optional[str] = None


@dataclass
class OrderBy:
    """Direction per sortable column ("asc"/"desc"); rendered as id, age, name."""
    id: Optional[str] = None
    age: Optional[str] = None
    name: Optional[str] = None


@dataclass
class PageWindow:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class RetrieveOptions:
    limit: int = 0
    statuses: List[str] = field(default_factory=list)
    countries: List[str] = field(default_factory=list)
    order_by: Optional[str] = None
    order: Optional[str] = None
