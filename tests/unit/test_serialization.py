"""Tests for model serialization."""

from typing import Optional

from persistkit.constants import SqlDialect
from persistkit.types import EntityShape, PersistBaseModel


class TestPersistBaseModel:
    """Test PersistBaseModel serialization functionality."""

    def test_simple_model_to_dict(self):
        class SimpleModel(PersistBaseModel):
            name: str
            value: int

        result = SimpleModel(name="test", value=42).to_dict()

        assert result == {"name": "test", "value": 42}

    def test_none_values_are_dropped(self):
        class Article(PersistBaseModel):
            id: Optional[int] = None
            title: str

        assert Article(title="draft").to_dict() == {"title": "draft"}

    def test_enums_are_serialized_as_values(self):
        class Target(PersistBaseModel):
            dialect: SqlDialect

        assert Target(dialect=SqlDialect.SQLSERVER).to_dict() == {"dialect": "sqlserver"}

    def test_entity_shape_to_dict(self):
        shape = EntityShape.define("Article", ["Title"], columns={"Title": "headline"})

        assert shape.to_dict() == {
            "name": "Article",
            "fields": [
                {"name": "Id", "identity": True},
                {"name": "Title", "column": "headline", "identity": False},
            ],
        }

    def test_assignment_is_validated(self):
        class Article(PersistBaseModel):
            id: int = 0

        article = Article()
        article.id = "15"

        assert article.id == 15
