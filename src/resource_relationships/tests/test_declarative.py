import pytest

from ..declarative import BelongsTo, HasMany, HasOne, Meta, build_descriptor, handle_meta
from ..exceptions import InvalidDeclarationError
from ..models import RelationshipKind
from ..utils import UNSPECIFIED


class TestBuildDescriptor:
    def test_has_many_defaults(self):
        descr = build_descriptor(HasMany("articles"))
        assert descr.kind is RelationshipKind.TO_MANY
        assert descr.name == "articles"
        assert descr.related_type_name == "Article"
        assert descr.data_key == "articles"
        assert descr.path_template == "/articles"
        assert descr.inverse_name is None
        assert descr.foreign_key is None

    def test_has_many_options(self):
        descr = build_descriptor(
            HasMany(
                "posts",
                class_name="blog.Article",
                data_key="post_list",
                path="/entries",
                inverse_of="writer",
            )
        )
        assert descr.related_type_name == "blog.Article"
        assert descr.data_key == "post_list"
        assert descr.path_template == "/entries"
        assert descr.inverse_name == "writer"

    def test_has_one_defaults(self):
        descr = build_descriptor(HasOne("organization"))
        assert descr.kind is RelationshipKind.TO_ONE
        assert descr.related_type_name == "Organization"
        assert descr.data_key == "organization"
        assert descr.path_template == "/organization"

    def test_belongs_to_defaults(self):
        descr = build_descriptor(BelongsTo("team", class_name="Group"))
        assert descr.kind is RelationshipKind.OWNED_BY
        assert descr.related_type_name == "Group"
        assert descr.data_key == "team"
        assert descr.foreign_key == "team_id"
        assert descr.path_template == "/teams/:id"

    def test_belongs_to_compound_name(self):
        descr = build_descriptor(BelongsTo("billing_address"))
        assert descr.related_type_name == "BillingAddress"
        assert descr.foreign_key == "billing_address_id"
        assert descr.path_template == "/billing_addresses/:id"

    @pytest.mark.parametrize("name", ["", "has space", "1st"])
    def test_invalid_name(self, name):
        with pytest.raises(InvalidDeclarationError):
            build_descriptor(HasMany(name))


class TestHandleMeta:
    def test_none(self):
        assert handle_meta(None) == Meta()

    def test_options(self):
        class _Meta:
            collection_path = "/people"
            primary_key = "slug"
            relationships = [HasMany("articles"), BelongsTo("team")]

        meta = handle_meta(_Meta)
        assert meta.collection_path == "/people"
        assert meta.primary_key == "slug"
        assert meta.resource_path is UNSPECIFIED
        assert [r.name for r in meta.relationships] == ["articles", "team"]
        assert meta.abstract is False

    def test_unknown_option(self):
        class _Meta:
            colection_path = "/people"

        with pytest.raises(InvalidDeclarationError):
            handle_meta(_Meta)

    def test_invalid_relationship(self):
        class _Meta:
            relationships = [("has_many", "articles")]

        with pytest.raises(InvalidDeclarationError):
            handle_meta(_Meta)
