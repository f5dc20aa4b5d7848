import pytest

from ..exceptions import InvalidDeclarationError
from ..models import (
    UNLOADED,
    Collection,
    Loaded,
    RelationshipDescriptor,
    RelationshipKind,
    RelationshipTable,
)


def descr(kind: RelationshipKind, name: str) -> RelationshipDescriptor:
    return RelationshipDescriptor(
        kind=kind,
        name=name,
        related_type_name=name.capitalize(),
        data_key=name,
        path_template=f"/{name}",
    )


class TestRelationshipTable:
    def test_iteration_order(self):
        table = RelationshipTable()
        table.add(descr(RelationshipKind.OWNED_BY, "team"))
        table.add(descr(RelationshipKind.TO_MANY, "articles"))
        table.add(descr(RelationshipKind.TO_MANY, "comments"))
        table.add(descr(RelationshipKind.TO_ONE, "profile"))

        assert [d.name for d in table] == ["articles", "comments", "profile", "team"]
        assert [d.name for d in table.of_kind(RelationshipKind.TO_MANY)] == [
            "articles",
            "comments",
        ]
        assert table.of_kind(RelationshipKind.TO_ONE)[0].name == "profile"
        assert len(table) == 4
        by_kind = dict(table.items())
        assert [d.name for d in by_kind[RelationshipKind.OWNED_BY]] == ["team"]
        assert RelationshipKind.TO_ONE in by_kind

    def test_find(self):
        table = RelationshipTable()
        articles = descr(RelationshipKind.TO_MANY, "articles")
        table.add(articles)
        assert table.find("articles") is articles
        assert table.find("comments") is None
        assert table.names() == {"articles"}

    def test_duplicate(self):
        table = RelationshipTable()
        table.add(descr(RelationshipKind.TO_MANY, "articles"))
        with pytest.raises(InvalidDeclarationError):
            table.add(descr(RelationshipKind.TO_ONE, "articles"))

    def test_derive_from(self):
        parent = RelationshipTable()
        articles = descr(RelationshipKind.TO_MANY, "articles")
        parent.add(articles)

        child = RelationshipTable.derive_from(parent)
        child.add(descr(RelationshipKind.TO_MANY, "permissions"))
        parent.add(descr(RelationshipKind.TO_ONE, "profile"))

        assert [d.name for d in parent] == ["articles", "profile"]
        assert [d.name for d in child] == ["articles", "permissions"]
        assert child.find("articles") is articles

    def test_derived_table_overrides_inherited(self):
        parent = RelationshipTable()
        parent.add(descr(RelationshipKind.TO_MANY, "articles"))
        parent.add(descr(RelationshipKind.TO_MANY, "comments"))
        parent.add(descr(RelationshipKind.TO_ONE, "profile"))

        child = RelationshipTable.derive_from(parent)
        articles = descr(RelationshipKind.TO_MANY, "articles")
        profile = descr(RelationshipKind.OWNED_BY, "profile")
        child.add(articles)
        child.add(profile)

        assert [d.name for d in child] == ["articles", "comments", "profile"]
        assert child.find("articles") is articles
        assert child.find("profile") is profile
        assert child.of_kind(RelationshipKind.TO_ONE) == ()
        assert parent.find("articles") is not articles
        assert parent.find("profile").kind is RelationshipKind.TO_ONE

        with pytest.raises(InvalidDeclarationError):
            child.add(descr(RelationshipKind.TO_MANY, "articles"))

    def test_derive_from_nothing(self):
        assert len(RelationshipTable.derive_from(None)) == 0


def test_descriptor_is_immutable():
    d = descr(RelationshipKind.TO_MANY, "articles")
    with pytest.raises(AttributeError):
        d.name = "comments"  # type: ignore


def test_states():
    assert not UNLOADED
    assert Loaded([]) == Loaded([])
    assert Loaded(None) != Loaded([])
    assert repr(UNLOADED) == "UNLOADED"


def test_collection():
    c = Collection([1, 2], metadata={"total": 2})
    assert c == [1, 2]
    assert c.metadata == {"total": 2}
    assert c.errors == {}
    assert Collection().metadata == {}
