import pytest

from db.store import ITEM_CATEGORY_MAP
from services.items import normalize_item


class TestClassify:
    """Tests for ItemMapService.classify."""

    def test_classify_mapped_item(self, seeded_services):
        """Test classifying a seeded item."""
        assert seeded_services.items.classify("chicken").name == "Protein"
        assert seeded_services.items.classify("milk").name == "Dairy"

    @pytest.mark.parametrize("text", ["Chicken", "CHICKEN", "  chicken ", "\tChIcKeN\n"])
    def test_classify_case_and_whitespace_insensitive(self, seeded_services, text):
        """Test classify(t) matches classify of the normalized text."""
        items = seeded_services.items

        assert items.classify(text) == items.classify(text.strip().lower())
        assert items.classify(text).name == "Protein"

    def test_classify_unmapped_item_falls_back(self, seeded_services):
        """Test that unknown items are assigned Other."""
        category = seeded_services.items.classify("saffron")

        assert category.name == "Other"
        assert category.id == 8

    def test_classify_empty_text_falls_back(self, seeded_services):
        """Test that classify never fails, even on empty input."""
        assert seeded_services.items.classify("").name == "Other"
        assert seeded_services.items.classify(None).name == "Other"

    def test_classify_dangling_category_falls_back(self, seeded_services):
        """Test that a mapping to a missing category id resolves to Other."""
        seeded_services.store.save(ITEM_CATEGORY_MAP, {"kale": 4242})

        assert seeded_services.items.classify("kale").name == "Other"

    def test_classify_on_empty_store_creates_fallback(self, services):
        """Test that classification works before any data exists."""
        assert services.items.classify("chicken").name == "Other"
        assert services.categories.find_by_name("Other") is not None


class TestUpsert:
    """Tests for ItemMapService.upsert."""

    def test_upsert_new_item(self, seeded_services):
        """Test adding a new mapping normalizes the item."""
        assert seeded_services.items.upsert("  Paneer ", 5) is True

        assert seeded_services.store.load(ITEM_CATEGORY_MAP)["paneer"] == 5
        assert seeded_services.items.classify("PANEER").name == "Dairy"

    def test_upsert_overwrites_existing(self, seeded_services):
        """Test that an existing mapping is replaced."""
        assert seeded_services.items.upsert("Tofu", 2) is True

        assert seeded_services.items.classify("tofu").name == "Vegetables"

    def test_upsert_empty_item_rejected(self, seeded_services):
        """Test that empty item text is rejected."""
        before = seeded_services.store.load(ITEM_CATEGORY_MAP)

        assert seeded_services.items.upsert("   ", 1) is False
        assert seeded_services.store.load(ITEM_CATEGORY_MAP) == before

    def test_upsert_missing_category_rejected(self, seeded_services):
        """Test that a missing or unknown category is rejected."""
        assert seeded_services.items.upsert("paneer", None) is False
        assert seeded_services.items.upsert("paneer", 9999) is False
        assert "paneer" not in seeded_services.items.items()


class TestRemove:
    """Tests for ItemMapService.remove."""

    def test_remove_existing(self, seeded_services):
        """Test removing a mapping."""
        assert seeded_services.items.remove("Egg") is True

        assert "egg" not in seeded_services.items.items()
        assert seeded_services.items.classify("egg").name == "Other"

    def test_remove_is_idempotent(self, seeded_services):
        """Test that removing an absent mapping is not an error."""
        seeded_services.items.remove("egg")

        assert seeded_services.items.remove("egg") is False
        assert seeded_services.items.remove("never-mapped") is False


class TestListing:
    """Tests for listing known items."""

    def test_items_sorted(self, seeded_services):
        """Test the selectable list of known items."""
        items = seeded_services.items.items()

        assert items == sorted(items)
        assert len(items) == 25
        assert items[0] == "apple"

    def test_find_all_resolves_categories(self, seeded_services):
        """Test that find_all returns item -> Category."""
        seeded_services.store.save(ITEM_CATEGORY_MAP, {"tea": 7, "kale": 4242})

        mappings = seeded_services.items.find_all()

        assert list(mappings) == ["kale", "tea"]
        assert mappings["tea"].name == "Beverages"
        assert mappings["kale"].name == "Other"


def test_normalize_item():
    assert normalize_item("  Green Tea ") == "green tea"
    assert normalize_item(None) == ""
