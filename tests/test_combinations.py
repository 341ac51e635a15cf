"""Tests for combination detection, registration, storage and autocomplete."""
import pytest

from rxparse.db import combination_store, medicine_store
from rxparse.db.seed_data import COMMON_COMBINATIONS, COMMON_MEDICINES
from rxparse.schemas.models import CombinationUpsert
from rxparse.services.autocomplete import suggest
from rxparse.services.combinations import detect_combination, register_combination, synthesize_short_name


class TestDetectCombination:
    def test_bare_shape_gets_initials(self):
        found = detect_combination("Arnica + Belladonna + Calendula")
        assert found.short_name == "ABC"
        assert found.content == "Arnica + Belladonna + Calendula"

    def test_coded_shape(self):
        found = detect_combination("BCR (Bryonia + Causticum + Rhus Tox)")
        assert found.short_name == "BCR"
        assert found.content == "Bryonia + Causticum + Rhus Tox"

    def test_lowercase_parts(self):
        assert synthesize_short_name("nux vomica + sulphur") == "NS"

    @pytest.mark.parametrize("name", [
        "Arnica Montana", "", None, "BCR (Bryonia)",
        "Arnica +", "+ Arnica", "+", "Arnica + + ", "BC (Bryonia +)",
    ])
    def test_not_a_combination(self, name):
        assert detect_combination(name) is None


class TestRegisterCombination:
    def test_first_sighting_creates(self, conn):
        result = register_combination(conn, "Arnica + Belladonna + Calendula")
        assert result.created is True
        assert result.combination.name == "ABC"
        assert result.combination.content == "Arnica + Belladonna + Calendula"

    def test_idempotent(self, conn):
        first = register_combination(conn, "Arnica + Belladonna + Calendula")
        again = register_combination(conn, "Arnica + Belladonna + Calendula")
        assert again.created is False
        assert again.combination.id == first.combination.id
        assert len(combination_store.list_all(conn)) == 1

    def test_existing_content_under_another_name(self, conn):
        combination_store.upsert(conn, CombinationUpsert(name="WND", content="Arnica + Belladonna + Calendula"))
        result = register_combination(conn, "arnica + belladonna + calendula")
        assert result.created is False
        assert result.combination.name == "WND"

    def test_existing_name_is_not_overwritten(self, conn):
        combination_store.upsert(conn, CombinationUpsert(name="AB", content="Arnica + Belladonna"))
        result = register_combination(conn, "Aconite + Bryonia")
        assert result.created is False
        assert result.combination.content == "Arnica + Belladonna"

    def test_plain_name_is_ignored(self, conn):
        assert register_combination(conn, "Nux Vomica") is None
        assert register_combination(conn, "Arnica +") is None
        assert combination_store.list_all(conn) == []


class TestCombinationStore:
    def test_upsert_overwrites_by_name_case_insensitively(self, conn):
        first = combination_store.upsert(conn, CombinationUpsert(name="BC", content="Bryonia + Causticum"))
        second = combination_store.upsert(
            conn, CombinationUpsert(name="bc", content="Belladonna + Calendula", description="wounds")
        )
        assert first.created is True
        assert second.created is False
        assert second.combination.id == first.combination.id
        assert second.combination.name == "BC"
        assert second.combination.content == "Belladonna + Calendula"
        assert second.combination.description == "wounds"

    def test_lookup(self, conn):
        combination_store.upsert(conn, CombinationUpsert(name="BC", content="Bryonia + Causticum"))
        assert combination_store.get_by_name(conn, "bc").content == "Bryonia + Causticum"
        assert combination_store.get_by_content(conn, "BRYONIA + CAUSTICUM").name == "BC"
        assert combination_store.get_by_name(conn, "XYZ") is None

    def test_delete(self, conn):
        saved = combination_store.upsert(conn, CombinationUpsert(name="BC", content="Bryonia + Causticum"))
        assert combination_store.delete(conn, saved.combination.id) is True
        assert combination_store.delete(conn, saved.combination.id) is False


class TestSeedAndAutocomplete:
    def test_seed_fills_empty_tables_once(self, conn):
        assert medicine_store.seed_defaults(conn) == {
            "medicines": len(COMMON_MEDICINES),
            "combinations": len(COMMON_COMBINATIONS),
        }
        assert medicine_store.seed_defaults(conn) == {"medicines": 0, "combinations": 0}

    def test_suggest_medicines_and_combinations(self, conn):
        medicine_store.seed_defaults(conn)
        found = suggest(conn, "arnica")
        assert "Arnica Montana" in [m.name for m in found.medicines]
        assert all(m.kind == "medicine" for m in found.medicines)
        combos = {c.name: c for c in found.combinations}
        assert {"AB", "ABC"} <= set(combos)
        assert combos["ABC"].kind == "combination"
        assert combos["ABC"].content == "Arnica + Belladonna + Calendula"

    def test_suggest_by_combination_code(self, conn):
        medicine_store.seed_defaults(conn)
        assert [c.name for c in suggest(conn, "bcr").combinations] == ["BCR"]

    def test_blank_prefix(self, conn):
        medicine_store.seed_defaults(conn)
        found = suggest(conn, "  ")
        assert found.medicines == [] and found.combinations == []

    def test_limit(self, conn):
        medicine_store.seed_defaults(conn)
        assert len(suggest(conn, "a", limit=3).medicines) == 3

    def test_add_medicine(self, conn):
        assert medicine_store.add(conn, "Thuja") is True
        assert medicine_store.add(conn, "thuja") is False
        assert medicine_store.search(conn, "THU") == ["Thuja"]
