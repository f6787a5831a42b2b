"""Category configuration model.

``categories`` maps a category name to the skill names it groups (the
names are not checked against the registry). ``category_order`` is the
display order. The two can drift apart; editing helpers keep them in
step, and ``order_divergence()`` reports drift without failing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable


class CategoryFormatError(ValueError):
    """Raised when a loaded document does not have the category shape."""

    pass


@dataclass
class CategoryConfig:
    categories: dict[str, list[str]] = field(default_factory=dict)
    category_order: list[str] = field(default_factory=list)

    @classmethod
    def default(cls, name: str) -> "CategoryConfig":
        return cls(categories={name: []}, category_order=[name])

    @classmethod
    def from_dict(cls, data: Any) -> "CategoryConfig":
        """Build from the JSON document; unknown keys are ignored."""
        if not isinstance(data, dict):
            raise CategoryFormatError("expected a JSON object")
        raw_categories = data.get("categories")
        if not isinstance(raw_categories, dict):
            raise CategoryFormatError("'categories' must be an object")

        categories: dict[str, list[str]] = {}
        for name, skills in raw_categories.items():
            if not isinstance(skills, list) or not all(isinstance(s, str) for s in skills):
                raise CategoryFormatError(f"category '{name}' must be a list of skill names")
            categories[name] = list(skills)

        raw_order = data.get("categoryOrder") or []
        if not isinstance(raw_order, list) or not all(isinstance(c, str) for c in raw_order):
            raise CategoryFormatError("'categoryOrder' must be a list of category names")

        return cls(categories=categories, category_order=list(raw_order))

    def to_dict(self) -> dict[str, Any]:
        return {
            "categories": {name: list(skills) for name, skills in self.categories.items()},
            "categoryOrder": list(self.category_order),
        }

    def copy(self) -> "CategoryConfig":
        return CategoryConfig(
            categories={name: list(skills) for name, skills in self.categories.items()},
            category_order=list(self.category_order),
        )

    def display_order(self) -> list[str]:
        return list(self.category_order) or list(self.categories)

    def order_divergence(self) -> tuple[list[str], list[str]]:
        """Return (categories missing from the order, order entries without a category)."""
        missing = [name for name in self.categories if name not in self.category_order]
        unknown = [name for name in self.category_order if name not in self.categories]
        return missing, unknown

    def category_of(self, skill_name: str) -> str | None:
        for name, skills in self.categories.items():
            if skill_name in skills:
                return name
        return None

    # Editing helpers. Each returns a new config; the receiver is untouched.

    def add_category(self, name: str) -> "CategoryConfig":
        name = name.strip()
        if not name:
            raise ValueError("Category name cannot be empty")
        if name in self.categories:
            raise ValueError(f"Category '{name}' already exists")
        updated = self.copy()
        updated.categories[name] = []
        updated.category_order.append(name)
        return updated

    def remove_category(self, name: str) -> "CategoryConfig":
        """Drop a category; its skills move to the first remaining one."""
        if name not in self.categories:
            raise KeyError(f"Category '{name}' does not exist")
        if len(self.categories) <= 1:
            raise ValueError("The last category cannot be removed")

        updated = self.copy()
        orphans = updated.categories.pop(name)
        updated.category_order = [c for c in updated.category_order if c != name]
        first = next(
            (c for c in updated.display_order() if c in updated.categories),
            next(iter(updated.categories)),
        )
        updated.categories[first].extend(s for s in orphans if s not in updated.categories[first])
        return updated

    def rename_category(self, old: str, new: str) -> "CategoryConfig":
        new = new.strip()
        if old not in self.categories:
            raise KeyError(f"Category '{old}' does not exist")
        if not new or new == old:
            return self.copy()
        if new in self.categories:
            raise ValueError(f"Category '{new}' already exists")

        # Rebuild the mapping so the renamed key keeps its position.
        categories = {
            (new if key == old else key): list(skills) for key, skills in self.categories.items()
        }
        order = [new if c == old else c for c in self.category_order]
        return CategoryConfig(categories=categories, category_order=order)

    def reorder(self, order: Iterable[str]) -> "CategoryConfig":
        order = list(order)
        if len(set(order)) != len(order):
            raise ValueError("Category order contains duplicates")
        updated = self.copy()
        updated.category_order = order
        return updated

    def assign_skill(self, skill_name: str, category: str) -> "CategoryConfig":
        """Place a skill in exactly one category."""
        if category not in self.categories:
            raise KeyError(f"Category '{category}' does not exist")
        updated = self.forget_skill(skill_name)
        updated.categories[category].append(skill_name)
        return updated

    def forget_skill(self, skill_name: str) -> "CategoryConfig":
        updated = self.copy()
        for name, skills in updated.categories.items():
            updated.categories[name] = [s for s in skills if s != skill_name]
        return updated

    def normalized(self, skill_names: Iterable[str] = ()) -> "CategoryConfig":
        """Repair the order list and file uncategorised skills under the first category."""
        updated = self.copy()
        order = [c for c in updated.display_order() if c in updated.categories]
        order.extend(c for c in updated.categories if c not in order)
        updated.category_order = list(dict.fromkeys(order))

        assigned = {s for skills in updated.categories.values() for s in skills}
        loose = [s for s in dict.fromkeys(skill_names) if s not in assigned]
        if loose and updated.category_order:
            updated.categories[updated.category_order[0]].extend(loose)
        return updated
