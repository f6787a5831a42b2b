"""Tests for the category editing helpers."""

import pytest

from categories import CategoryConfig, CategoryFormatError


@pytest.fixture
def config() -> CategoryConfig:
    return CategoryConfig(
        categories={"General": ["a"], "Code": ["lint", "fmt"], "Docs": []},
        category_order=["General", "Code", "Docs"],
    )


class TestFromDict:
    def test_unknown_keys_are_dropped(self):
        config = CategoryConfig.from_dict(
            {"categories": {"X": ["s"]}, "categoryOrder": ["X"], "theme": "dark"}
        )
        assert config.to_dict() == {"categories": {"X": ["s"]}, "categoryOrder": ["X"]}

    def test_order_is_optional(self):
        assert CategoryConfig.from_dict({"categories": {}}).category_order == []

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"categories": []},
            {"categories": {"X": "not-a-list"}},
            {"categories": {"X": [1]}},
            {"categories": {}, "categoryOrder": "X"},
        ],
    )
    def test_bad_shapes_are_rejected(self, data):
        with pytest.raises(CategoryFormatError):
            CategoryConfig.from_dict(data)


class TestEditing:
    def test_add_category_appends_to_order(self, config):
        updated = config.add_category("  New ")
        assert updated.category_order[-1] == "New"
        assert updated.categories["New"] == []
        assert "New" not in config.categories

    def test_add_duplicate_category_fails(self, config):
        with pytest.raises(ValueError):
            config.add_category("Code")

    def test_remove_moves_skills_to_first(self, config):
        updated = config.remove_category("Code")
        assert updated.category_order == ["General", "Docs"]
        assert updated.categories["General"] == ["a", "lint", "fmt"]

    def test_remove_first_moves_skills_to_next(self, config):
        updated = config.remove_category("General")
        assert updated.categories["Code"] == ["lint", "fmt", "a"]

    def test_last_category_cannot_be_removed(self):
        with pytest.raises(ValueError):
            CategoryConfig.default("Only").remove_category("Only")

    def test_rename_keeps_position(self, config):
        updated = config.rename_category("Code", "Engineering")
        assert list(updated.categories) == ["General", "Engineering", "Docs"]
        assert updated.category_order == ["General", "Engineering", "Docs"]
        assert updated.categories["Engineering"] == ["lint", "fmt"]

    def test_rename_to_existing_fails(self, config):
        with pytest.raises(ValueError):
            config.rename_category("Code", "Docs")

    def test_reorder_rejects_duplicates(self, config):
        with pytest.raises(ValueError):
            config.reorder(["Docs", "Docs"])
        assert config.reorder(["Docs", "Code", "General"]).category_order == ["Docs", "Code", "General"]

    def test_assign_moves_skill_between_categories(self, config):
        updated = config.assign_skill("lint", "Docs")
        assert updated.categories["Code"] == ["fmt"]
        assert updated.categories["Docs"] == ["lint"]
        assert updated.category_of("lint") == "Docs"

    def test_forget_skill_removes_everywhere(self, config):
        updated = config.forget_skill("a")
        assert updated.category_of("a") is None


class TestNormalized:
    def test_repairs_order_and_files_loose_skills(self):
        config = CategoryConfig(
            categories={"A": ["x"], "B": []},
            category_order=["B", "Gone"],
        )
        normalized = config.normalized(["x", "y", "z", "y"])
        assert normalized.category_order == ["B", "A"]
        assert normalized.categories["B"] == ["y", "z"]
        assert normalized.order_divergence() == ([], [])

    def test_empty_order_uses_key_order(self):
        config = CategoryConfig(categories={"A": [], "B": []})
        assert config.normalized().category_order == ["A", "B"]
