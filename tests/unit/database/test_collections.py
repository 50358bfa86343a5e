"""
Tests for the collection registry and model serialization.
"""
import pytest

from vrcms.core.exceptions import ValidationError
from vrcms.database.collections import COLLECTIONS, collection_names, get_collection
from vrcms.database.models import Product, ServiceType


class TestCollectionRegistry:
    """Test collection lookup."""

    def test_all_collections_registered(self):
        assert collection_names() == ["media", "products", "tools", "services"]

    def test_unknown_collection_raises(self):
        with pytest.raises(ValidationError, match="Unknown collection: 'widgets'"):
            get_collection("widgets")

    @pytest.mark.parametrize(
        "name,field",
        [
            ("products", "related_products"),
            ("tools", "related_tools"),
            ("services", "related_services"),
        ],
    )
    def test_relationships_point_into_own_collection(self, name, field):
        assert get_collection(name).relationships == {field: name}

    def test_media_has_no_slug(self):
        assert not get_collection("media").has_slug
        assert get_collection("services").slug_source == "title"

    def test_field_names_include_relationships(self):
        for config in COLLECTIONS.values():
            for field in config.relationships:
                assert field in config.field_names

    def test_status_normalizer_rejects_unknown(self):
        with pytest.raises(ValidationError, match="Invalid status"):
            get_collection("products").normalizers["status"]("archived")


class TestModels:
    """Test model helpers."""

    def test_to_dict_copies_lists(self):
        product = Product(id="abc", name="Chiller", slug="chiller", related_products=["x"])
        doc = product.to_dict()
        doc["related_products"].append("y")
        assert product.related_products == ["x"]

    def test_service_type_display_name(self):
        assert ServiceType.CONSULTING.value == "consulting"
        assert ServiceType.CONSULTING.display_name == "Tư vấn"
