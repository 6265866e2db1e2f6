"""Policy models - per-identity category access state."""

from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Set
from pydantic import BaseModel, ConfigDict, Field, field_validator

UNCATEGORIZED = "uncategorized"


def normalize_category(category: Optional[str]) -> str:
    """Lowercase a category name; missing or blank names become ``uncategorized``."""
    if category is None:
        return UNCATEGORIZED
    cat = str(category).strip().lower()
    return cat or UNCATEGORIZED


def _normalize_all(categories: Iterable[str]) -> Set[str]:
    return {normalize_category(c) for c in categories}


class Mode(str, Enum):
    """Overall disposition of a policy."""
    ALL = "ALL"        # every category allowed
    NONE = "NONE"      # every category denied
    ONLY = "ONLY"      # cats is an allow-list
    EXCEPT = "EXCEPT"  # cats is a deny-list


class Policy(BaseModel):
    """
    Access policy for a single identity.

    Mutable on purpose: the transition functions in ``policy.engine`` update
    it in place. Anything handing a Policy to outside callers must give out
    a copy (see ``PolicyStore``).
    """

    mode: Mode = Field(default=Mode.ALL, description="Policy disposition")
    cats: Set[str] = Field(default_factory=set, description="Lowercased category names")

    @field_validator("cats", mode="before")
    @classmethod
    def _lowercase_cats(cls, value):
        if value is None:
            return set()
        return _normalize_all(value)

    def copy_policy(self) -> "Policy":
        """Deep copy, never sharing the category set."""
        return Policy(mode=self.mode, cats=set(self.cats))

    def sorted_cats(self) -> List[str]:
        return sorted(self.cats)

    def is_equivalent(self, other: "Policy") -> bool:
        """Same mode and same categories, ignoring case."""
        return self.mode == other.mode and _normalize_all(self.cats) == _normalize_all(other.cats)


class DefaultPolicy(BaseModel):
    """Process-wide fallback policy, frozen after startup."""

    model_config = ConfigDict(frozen=True)

    mode: Mode = Field(default=Mode.ALL, description="Default disposition")
    cats: FrozenSet[str] = Field(default_factory=frozenset, description="Default category set")

    @field_validator("cats", mode="before")
    @classmethod
    def _lowercase_cats(cls, value):
        if value is None:
            return frozenset()
        return frozenset(_normalize_all(value))

    def to_policy(self) -> Policy:
        """Build a fresh, independent Policy seeded from this default."""
        return Policy(mode=self.mode, cats=set(self.cats))
