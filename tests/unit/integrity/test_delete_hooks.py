"""
Tests for the delete-hook wiring of reference cleanup.

The central contract: a delete always completes, whatever happens to the
cleanup, and the cleanup outcome is handed back through the delete context.
"""
import pytest
from unittest.mock import MagicMock, patch

from vrcms.core.exceptions import CleanupError, ReferenceScanError
from vrcms.database.collections import get_collection
from vrcms.database.hooks import HookRegistry
from vrcms.integrity.cleanup import CleanupResult, WatchedField
from vrcms.integrity.delete_hooks import (
    CLEANUP_RESULTS_KEY,
    DEFAULT_CLEANUP_FIELDS,
    register_default_hooks,
    register_reference_cleanup,
)


class TestDefaultCleanupFields:
    """Test the per-collection field lists."""

    @pytest.mark.parametrize(
        "collection,field",
        [
            ("products", "related_products"),
            ("tools", "related_tools"),
            ("services", "related_services"),
        ],
    )
    def test_self_relationships(self, collection, field):
        assert DEFAULT_CLEANUP_FIELDS[collection] == [field]
        assert get_collection(collection).relationships[field] == collection

    def test_media_has_no_cleanup(self):
        assert "media" not in DEFAULT_CLEANUP_FIELDS


class TestRegisterReferenceCleanup:
    """Test hook registration."""

    def test_string_fields_become_watched_fields(self, store):
        hook = register_reference_cleanup(store.hooks, "tools", ["related_tools"])
        assert hook.__name__ == "cleanup_tools_references"
        assert store.hooks.before_delete("tools") == [hook]

    def test_after_phase(self, store):
        hook = register_reference_cleanup(store.hooks, "tools", ["related_tools"], when="after")
        assert store.hooks.after_delete("tools") == [hook]
        assert store.hooks.before_delete("tools") == []

    def test_result_appended_to_context(self, store, make_tool):
        register_reference_cleanup(store.hooks, "tools", ["related_tools"])
        target = make_tool()
        sibling = make_tool(related=[target["id"], "keep"])
        context = {"source": "test"}

        store.delete("tools", target["id"], context=context)

        results = context[CLEANUP_RESULTS_KEY]
        assert len(results) == 1
        assert results[0].updated == [sibling["id"]]
        assert store.find_by_id("tools", sibling["id"])["related_tools"] == ["keep"]

    def test_crashed_cleanup_is_reported_not_raised(self, mock_logger):
        """A crash inside cleanup yields a failed result, never an exception."""
        registry = HookRegistry()
        hook = register_reference_cleanup(registry, "tools", ["related_tools"], logger=mock_logger)
        event = MagicMock()
        event.collection = "tools"
        event.record_id = "abc"
        event.context = {}

        with patch(
            "vrcms.integrity.delete_hooks.ReferenceCleanup.run",
            side_effect=RuntimeError("broken"),
        ):
            result = hook(event)

        assert isinstance(result, CleanupResult)
        assert not result.ok
        assert isinstance(result.error, CleanupError)
        assert isinstance(result.error.__cause__, RuntimeError)
        mock_logger.log_warning.assert_called_once()
        mock_logger.log_info.assert_not_called()
        mock_logger.log_error.assert_called_once()
        assert event.context[CLEANUP_RESULTS_KEY] == [result]


class TestDefaultHooks:
    """Test the default wiring through a full delete."""

    def test_registers_every_content_collection(self):
        registered = register_default_hooks(HookRegistry())
        assert set(registered) == {"products", "tools", "services"}
        assert registered["tools"] == [WatchedField("tools", "related_tools")]

    def test_every_collection_gets_after_hook(self):
        registry = HookRegistry()
        register_default_hooks(registry)
        for name in ("media", "products", "tools", "services"):
            assert len(registry.after_delete(name)) == 1

    def test_delete_cleans_siblings(self, hooked_store):
        target = hooked_store.create("services", {"title": "Sửa chữa khẩn cấp"})
        sibling = hooked_store.create(
            "services",
            {"title": "Bảo trì định kỳ", "related_services": [{"id": target["id"]}]},
        )

        hooked_store.delete("services", target["id"])

        assert hooked_store.find_by_id("services", sibling["id"])["related_services"] == []

    def test_delete_completes_when_scan_fails(self, hooked_store, make_product):
        """A failing scan is logged and the delete still goes through."""
        target = make_product()
        sibling = make_product(related=[target["id"]])
        context = {}

        with patch(
            "vrcms.integrity.scanner.ReferenceScanner.scan",
            side_effect=ReferenceScanError("timeout", collection="products"),
        ):
            doc = hooked_store.delete("products", target["id"], context=context)

        assert doc["id"] == target["id"]
        assert hooked_store.find_by_id("products", target["id"]) is None
        result = context[CLEANUP_RESULTS_KEY][0]
        assert isinstance(result.error, ReferenceScanError)
        # Cleanup did not run, so the stale entry is still there
        assert hooked_store.find_by_id("products", sibling["id"])["related_products"] == [target["id"]]

    def test_delete_completes_when_update_fails(self, hooked_store, make_product):
        target = make_product()
        make_product(related=[target["id"]])
        context = {}

        with patch.object(hooked_store, "update", side_effect=RuntimeError("locked")):
            hooked_store.delete("products", target["id"], context=context)

        assert hooked_store.find_by_id("products", target["id"]) is None
        assert len(context[CLEANUP_RESULTS_KEY][0].failures) == 1
