"""
Tests for the dangling-reference audit.
"""
import pytest
from unittest.mock import patch

from vrcms.core.exceptions import ValidationError
from vrcms.integrity.audit import (
    DanglingReference,
    audit_references,
    find_dangling_references,
    repair_dangling_references,
)


@pytest.fixture
def dangling_setup(store, make_product):
    """One live product and one product pointing at a live and a missing ID."""
    live = make_product()
    holder = make_product(
        related=[live["id"], "gone", {"id": "gone"}, {"value": "also-gone"}, 42]
    )
    return live, holder


class TestFindDangling:
    """Test detection."""

    def test_reports_missing_ids_once_per_record(self, store, dangling_setup):
        live, holder = dangling_setup
        found = find_dangling_references(store, "products", "related_products")
        assert found == [
            DanglingReference("products", holder["id"], "related_products", "gone"),
            DanglingReference("products", holder["id"], "related_products", "also-gone"),
        ]

    def test_non_relationship_field(self, store):
        with pytest.raises(ValidationError, match="not a relationship field"):
            find_dangling_references(store, "products", "specifications")

    def test_clean_collection(self, store, make_tool):
        a = make_tool()
        make_tool(related=[a["id"]])
        assert find_dangling_references(store, "tools", "related_tools") == []


class TestRepair:
    """Test repair."""

    def test_strips_missing_ids(self, store, dangling_setup):
        live, holder = dangling_setup
        found = find_dangling_references(store, "products", "related_products")

        repaired = repair_dangling_references(store, found)

        assert repaired == 1
        assert store.find_by_id("products", holder["id"])["related_products"] == [live["id"], 42]

    def test_update_failure_is_logged(self, store, dangling_setup, mock_logger):
        found = find_dangling_references(store, "products", "related_products")
        with patch.object(store, "update", side_effect=RuntimeError("locked")):
            repaired = repair_dangling_references(store, found, mock_logger)
        assert repaired == 0
        mock_logger.log_error.assert_called_once()


class TestAuditReferences:
    """Test the full audit."""

    def test_report_only(self, store, dangling_setup):
        stats, found = audit_references(store)
        assert stats.dangling_found == 2
        assert stats.records_repaired == 0
        assert len(found) == 2

    def test_fix(self, store, dangling_setup):
        stats, _ = audit_references(store, collection="products", fix=True)
        assert stats.records_repaired == 1
        stats, found = audit_references(store)
        assert found == []
        assert stats.dangling_found == 0
