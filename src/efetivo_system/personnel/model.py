from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Category, Rank


@dataclass(frozen=True)
class Person:
    """Militar do efetivo (Funcionário).

    category is always derived from rank, never stored.
    """

    person_id: int
    name: str
    rank: Rank
    seniority: int
    is_active: bool = True

    @property
    def category(self) -> Category:
        return self.rank.category

    @property
    def display_name(self) -> str:
        return f"{self.rank.value} {self.name}"
