import pytest

from ..exceptions import UnknownModelTypeError
from ..model import Model
from ..registry import ModelRegistry, TypeHandle


@pytest.fixture
def registry():
    return ModelRegistry()


def test_register_and_lookup(registry):
    reg = registry

    class Group(Model):
        class Meta:
            registry = reg
            namespace = "accounts"

    assert "accounts.Group" in registry
    assert registry.lookup("accounts.Group") is Group
    with pytest.raises(UnknownModelTypeError):
        registry.lookup("Group")


def test_resolve_prefers_namespace(registry):
    reg = registry

    class User(Model):
        class Meta:
            registry = reg
            namespace = "accounts"

    class Group(Model):
        class Meta:
            registry = reg
            namespace = "accounts"

    AccountsGroup = Group

    class Group(Model):  # noqa: F811
        class Meta:
            registry = reg
            namespace = "billing"

    assert registry.resolve("Group", User) is AccountsGroup
    assert registry.resolve("billing.Group", User) is Group


def test_resolve_dotted_name_relative_to_namespace(registry):
    reg = registry

    class User(Model):
        class Meta:
            registry = reg
            namespace = "app"

    class Invoice(Model):
        class Meta:
            registry = reg
            namespace = "app.billing"

    NestedInvoice = Invoice

    class Invoice(Model):  # noqa: F811
        class Meta:
            registry = reg
            namespace = "billing"

    assert registry.resolve("billing.Invoice", User) is NestedInvoice
    assert registry.resolve("billing.Invoice", Invoice) is Invoice
    with pytest.raises(UnknownModelTypeError):
        registry.resolve("Invoice", User)


def test_resolve_by_unique_simple_name(registry):
    reg = registry

    class User(Model):
        class Meta:
            registry = reg
            namespace = "accounts"

    class Invoice(Model):
        class Meta:
            registry = reg
            namespace = "billing"

    assert registry.resolve("Invoice", User) is Invoice


def test_resolve_ambiguous_simple_name(registry):
    reg = registry

    class User(Model):
        class Meta:
            registry = reg
            namespace = "accounts"

    for namespace in ("billing", "shipping"):

        class Address(Model):
            class Meta:
                registry = reg

        registry.register(Address, namespace)

    with pytest.raises(UnknownModelTypeError) as excinfo:
        registry.resolve("Address", User)
    assert "accounts" in str(excinfo.value)


def test_abstract_types_are_not_registered(registry):
    reg = registry

    class Base(Model):
        class Meta:
            registry = reg
            namespace = "accounts"
            abstract = True

    assert "accounts.Base" not in registry


def test_type_handle_is_lazy(registry):
    reg = registry

    class User(Model):
        class Meta:
            registry = reg
            namespace = "accounts"

    handle = TypeHandle("Team", User)
    with pytest.raises(UnknownModelTypeError):
        handle()

    class Team(Model):
        class Meta:
            registry = reg
            namespace = "accounts"

    assert handle() is Team
    assert handle() is Team
