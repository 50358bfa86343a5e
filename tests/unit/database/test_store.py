"""
Tests for RecordStore.

Covers find/count with Equals and Contains filters, create with slug
derivation and media uploads, partial updates and the delete pipeline.
"""
import pytest
from sqlalchemy import event

from vrcms.core.exceptions import DatabaseError, RecordNotFoundError, ValidationError
from vrcms.database.filters import Contains, Equals
from vrcms.database.store import UploadFile


class TestCreate:
    """Test record creation."""

    def test_create_returns_doc_with_id(self, store):
        doc = store.create("products", {"name": "Máy nén khí"})
        assert isinstance(doc["id"], str) and doc["id"]
        assert doc["slug"] == "may-nen-khi"
        assert doc["related_products"] == []
        assert doc["status"] == "draft"

    def test_supplied_slug_is_formatted(self, store):
        doc = store.create("services", {"title": "Tư vấn", "slug": "Tu Van Thiet Ke"})
        assert doc["slug"] == "tu-van-thiet-ke"

    def test_missing_required_field(self, store):
        with pytest.raises(ValidationError, match="'name'"):
            store.create("tools", {"category": "Calculators"})

    def test_unknown_field(self, store):
        with pytest.raises(ValidationError, match="colour"):
            store.create("products", {"name": "Chiller", "colour": "blue"})

    def test_unknown_collection(self, store):
        with pytest.raises(ValidationError, match="Unknown collection"):
            store.create("widgets", {"name": "x"})

    def test_duplicate_slug_is_database_error(self, store):
        store.create("services", {"title": "Bảo trì định kỳ"})
        with pytest.raises(DatabaseError, match="integrity"):
            store.create("services", {"title": "Bao tri dinh ky"})

    def test_relationship_must_be_list(self, store):
        with pytest.raises(ValidationError, match="must be a list"):
            store.create("products", {"name": "Chiller", "related_products": "abc"})

    def test_invalid_service_type(self, store):
        with pytest.raises(ValidationError, match="service type"):
            store.create("services", {"title": "X", "type": "cleaning"})

    def test_normalizers_applied(self, store):
        doc = store.create("products", {"name": "Chiller", "featured": "yes", "sort_order": "3"})
        assert doc["featured"] is True
        assert doc["sort_order"] == 3

    def test_file_only_for_media(self, store):
        with pytest.raises(ValidationError, match="does not accept files"):
            store.create("products", {"name": "x"}, file=UploadFile(b"x", "a.jpg"))


class TestMediaCreate:
    """Test media uploads."""

    def test_file_written_and_described(self, store, media_dir):
        doc = store.create(
            "media", {"alt": "Hero"}, file=UploadFile(b"\xff\xd8data", "Hero Image.JPG")
        )
        assert doc["filename"] == "hero-image.jpg"
        assert doc["url"] == "/media/hero-image.jpg"
        assert doc["filesize"] == 6
        assert doc["mime_type"] == "image/jpeg"
        assert (media_dir / "hero-image.jpg").read_bytes() == b"\xff\xd8data"

    def test_filename_clash_gets_suffix(self, store):
        first = store.create("media", {}, file=UploadFile(b"1", "photo.jpg"))
        second = store.create("media", {}, file=UploadFile(b"2", "photo.jpg"))
        assert first["filename"] == "photo.jpg"
        assert second["filename"] == "photo-1.jpg"

    def test_from_path(self, assets_dir):
        upload = UploadFile.from_path(assets_dir / "images" / "projects-overview.jpg")
        assert upload.filename == "projects-overview.jpg"
        assert upload.mimetype == "image/jpeg"
        assert upload.size > 0

    def test_delete_removes_file(self, store, media_dir):
        doc = store.create("media", {}, file=UploadFile(b"1", "photo.jpg"))
        store.delete("media", doc["id"])
        assert not (media_dir / "photo.jpg").exists()


class TestFind:
    """Test queries."""

    def test_equals(self, store, make_product):
        target = make_product(slug="chiller")
        make_product(slug="pump")
        result = store.find("products", Equals("slug", "chiller"))
        assert result["total"] == 1
        assert result["docs"][0]["id"] == target["id"]

    def test_limit_does_not_change_total(self, store, make_product):
        for _ in range(3):
            make_product()
        result = store.find("products", limit=1)
        assert len(result["docs"]) == 1
        assert result["total"] == 3

    def test_limit_with_equals_filter(self, store, make_product):
        for _ in range(3):
            make_product(status="published")
        make_product(status="draft")
        result = store.find("products", Equals("status", "published"), limit=2)
        assert len(result["docs"]) == 2
        assert result["total"] == 3

    def test_limit_is_applied_in_sql(self, store, test_db, make_product):
        make_product()
        make_product()
        statements = []

        @event.listens_for(test_db.engine, "before_cursor_execute")
        def capture(conn, cursor, statement, parameters, context, executemany):
            statements.append(statement)

        try:
            result = store.find("products", limit=1)
        finally:
            event.remove(test_db.engine, "before_cursor_execute", capture)

        assert len(result["docs"]) == 1
        assert any("LIMIT" in s for s in statements)
        assert any("count(" in s.lower() for s in statements)

    def test_limit_after_contains_confirmation(self, store, make_product):
        """Substring matches dropped by confirmation never use up the limit."""
        target = make_product()
        make_product(related=[target["id"] + "0"])
        match = make_product(related=[target["id"]])
        result = store.find(
            "products", Contains("related_products", target["id"]), limit=1
        )
        assert [d["id"] for d in result["docs"]] == [match["id"]]
        assert result["total"] == 1

    def test_count(self, store, make_tool):
        make_tool()
        make_tool()
        assert store.count("tools") == 2
        assert store.count("services") == 0

    def test_count_with_filters(self, store, make_product):
        target = make_product()
        make_product(related=[target["id"]], status="published")
        make_product(related=[target["id"][:-1]], status="published")
        assert store.count("products", Equals("status", "published")) == 2
        assert store.count("products", Contains("related_products", target["id"])) == 1

    def test_unknown_field(self, store):
        with pytest.raises(ValidationError, match="Unknown field 'colour'"):
            store.find("products", Equals("colour", "red"))

    def test_contains_is_array_membership(self, store, make_product):
        """Contains matches any element shape, never substrings."""
        target = make_product()
        bare = make_product(related=[target["id"]])
        by_id = make_product(related=[{"id": target["id"], "name": "x"}])
        by_value = make_product(related=[{"relationTo": "products", "value": target["id"]}])
        make_product(related=[target["id"] + "0", target["id"][:-1]])
        make_product(related=[])

        result = store.find("products", Contains("related_products", target["id"]))

        assert {d["id"] for d in result["docs"]} == {bare["id"], by_id["id"], by_value["id"]}

    def test_contains_rejects_blank_id(self, store):
        with pytest.raises(ValidationError):
            store.find("products", Contains("related_products", " "))

    def test_filters_combine(self, store, make_product):
        target = make_product()
        match = make_product(related=[target["id"]], status="published")
        make_product(related=[target["id"]])

        result = store.find(
            "products",
            [Contains("related_products", target["id"]), Equals("status", "published")],
        )
        assert [d["id"] for d in result["docs"]] == [match["id"]]

    def test_find_by_id_missing(self, store):
        assert store.find_by_id("tools", "does-not-exist") is None


class TestUpdate:
    """Test partial updates."""

    def test_only_given_fields_change(self, store, make_product):
        doc = make_product(excerpt="Old")
        updated = store.update("products", doc["id"], {"related_products": ["x"]})
        assert updated["related_products"] == ["x"]
        assert updated["excerpt"] == "Old"
        assert updated["name"] == doc["name"]

    def test_read_only_fields(self, store, make_product):
        doc = make_product()
        with pytest.raises(ValidationError, match="Read-only"):
            store.update("products", doc["id"], {"id": "other"})

    def test_missing_record(self, store):
        with pytest.raises(RecordNotFoundError):
            store.update("products", "nope", {"name": "x"})


class TestDelete:
    """Test the delete pipeline without cleanup hooks."""

    def test_returns_deleted_doc(self, store, make_tool):
        tool = make_tool()
        doc = store.delete("tools", tool["id"])
        assert doc["id"] == tool["id"]
        assert store.find_by_id("tools", tool["id"]) is None

    def test_missing_record(self, store):
        with pytest.raises(RecordNotFoundError):
            store.delete("tools", "nope")

    def test_hooks_run_in_order_with_context(self, store, make_tool):
        calls = []
        store.hooks.register_before_delete(
            "tools", lambda e: calls.append(("before", store.find_by_id("tools", e.record_id) is not None))
        )
        store.hooks.register_after_delete(
            "tools", lambda e: calls.append(("after", store.find_by_id("tools", e.record_id) is not None))
        )
        tool = make_tool()
        context = {"source": "test"}

        store.delete("tools", tool["id"], context=context)

        assert calls == [("before", True), ("after", False)]

    def test_context_is_shared_with_hooks(self, store, make_tool):
        store.hooks.register_before_delete("tools", lambda e: e.context.update(seen=True))
        tool = make_tool()
        context = {}
        store.delete("tools", tool["id"], context=context)
        assert context == {"seen": True}

    def test_raising_before_hook_aborts(self, store, make_tool):
        def veto(event):
            raise RuntimeError("vetoed")

        store.hooks.register_before_delete("tools", veto)
        tool = make_tool()

        with pytest.raises(RuntimeError, match="vetoed"):
            store.delete("tools", tool["id"])
        assert store.find_by_id("tools", tool["id"]) is not None

    def test_unrelated_records_untouched(self, store, make_product):
        """Without cleanup hooks references are left alone."""
        target = make_product()
        other = make_product(related=[target["id"]])
        store.delete("products", target["id"])
        assert store.find_by_id("products", other["id"])["related_products"] == [target["id"]]
