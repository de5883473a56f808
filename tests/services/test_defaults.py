import json
from datetime import date
from decimal import Decimal

import pytest

from db.store import CATEGORIES, EXPENSES, ITEM_CATEGORY_MAP
from services.defaults import import_legacy, install_defaults, load_seed


class TestInstallDefaults:
    """Tests for install_defaults."""

    def test_installs_all_records_on_empty_store(self, store):
        """Test first-run seeding."""
        installed = install_defaults(store)

        assert set(installed) == {EXPENSES, CATEGORIES, ITEM_CATEGORY_MAP}
        assert [c["name"] for c in store.load(CATEGORIES)] == [
            "Protein",
            "Vegetables",
            "Fruits",
            "Grains",
            "Dairy",
            "Snacks",
            "Beverages",
            "Other",
        ]
        assert len(store.load(ITEM_CATEGORY_MAP)) == 25
        assert store.load(EXPENSES) == []

    def test_seed_items_reference_seed_categories(self):
        """Test every seeded mapping points at a seeded category."""
        seed = load_seed()
        category_ids = {c["id"] for c in seed["categories"]}

        assert set(seed["itemCategoryMap"].values()) <= category_ids

    def test_second_run_installs_nothing(self, store):
        """Test that seeding runs once."""
        install_defaults(store)

        assert install_defaults(store) == []

    def test_existing_records_untouched(self, store):
        """Test that saved records, even empty ones, are not re-seeded."""
        store.save(CATEGORIES, [])

        installed = install_defaults(store)

        assert CATEGORIES not in installed
        assert store.load(CATEGORIES) == []
        assert len(store.load(ITEM_CATEGORY_MAP)) == 25

    def test_custom_seed_path(self, store, tmp_path):
        seed_path = tmp_path / "seed.json"
        seed_path.write_text(
            json.dumps({"categories": [{"id": 1, "name": "Other"}], "itemCategoryMap": {}})
        )

        install_defaults(store, seed_path)

        assert store.load(CATEGORIES) == [{"id": 1, "name": "Other"}]
        assert store.load(EXPENSES) == []


class TestImportLegacy:
    """Tests for import_legacy."""

    @pytest.fixture
    def legacy_payload(self):
        return {
            "categories": [
                {"id": 1, "name": "Protein"},
                {"id": 5, "name": "Dairy"},
                {"id": 8, "name": "Other"},
            ],
            "itemCategoryMap": {"chicken": "Protein", "Milk": "Dairy", "chai": "Drinks"},
            "expenses": [
                {
                    "id": 1710460800000,
                    "date": "2024-03-15",
                    "amount": 120.5,
                    "item": "chicken",
                    "category": "Protein",
                },
                {
                    "id": 1710547200000,
                    "date": "2024-03-16",
                    "amount": 30,
                    "item": "chai",
                    "category": "Drinks",
                },
                {
                    "id": 1710633600000,
                    "date": "2024-03-17",
                    "amount": 5,
                    "item": "gum",
                    "category": "Other",
                },
            ],
        }

    def test_import_converts_names_to_ids(self, services, legacy_payload):
        """Test legacy names are mapped onto category ids."""
        counts = import_legacy(services.store, legacy_payload)

        assert counts == {"expenses": 3, "categories": 4, "items": 3}

        chicken = services.expenses.find(1710460800000)
        assert chicken.category_id == 1
        assert chicken.amount == Decimal("120.5")
        assert chicken.date == date(2024, 3, 15)
        assert services.expenses.find(1710633600000).category_id == 8

    def test_import_creates_unknown_categories(self, services, legacy_payload):
        """Test names missing from the category list become categories."""
        import_legacy(services.store, legacy_payload)

        drinks = services.categories.find_by_name("Drinks")
        assert drinks is not None
        assert services.expenses.find(1710547200000).category_id == drinks.id
        assert services.items.classify("chai") == drinks

    def test_import_normalizes_item_keys(self, services, legacy_payload):
        import_legacy(services.store, legacy_payload)

        assert services.items.classify("milk").name == "Dairy"

    def test_import_adds_missing_fallback(self, services):
        """Test that Other exists after importing data without it."""
        import_legacy(
            services.store,
            {"categories": [{"id": 1, "name": "Protein"}], "itemCategoryMap": {}},
        )

        assert services.categories.find_by_name("Other") is not None

    def test_import_replaces_existing_data(self, seeded_services, legacy_payload):
        seeded_services.expenses.create("2024-01-01", 1, "egg")

        import_legacy(seeded_services.store, legacy_payload)

        assert len(seeded_services.expenses.find_all()) == 3
        assert len(seeded_services.categories.find_all()) == 4

    def test_import_bad_amount_writes_nothing(self, services, legacy_payload):
        legacy_payload["expenses"][0]["amount"] = "lots"

        with pytest.raises(ValueError):
            import_legacy(services.store, legacy_payload)

        assert services.store.exists(EXPENSES) is False
