import dataclasses
import typing

from .exceptions import InvalidDeclarationError
from .interfaces import ResourceLoader
from .models import RelationshipDescriptor, RelationshipKind
from .utils import (
    UNSPECIFIED,
    UnspecifiedType,
    classify,
    maybe_unspecified,
    pluralize,
)

if typing.TYPE_CHECKING:
    from .registry import ModelRegistry  # noqa: F401


@dataclasses.dataclass
class HasMany:
    name: str
    class_name: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    data_key: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    path: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    inverse_of: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    """Field set on every child; derived from the owner's class name when unspecified"""


@dataclasses.dataclass
class HasOne:
    name: str
    class_name: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    data_key: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    path: typing.Union[UnspecifiedType, str] = UNSPECIFIED


@dataclasses.dataclass
class BelongsTo:
    name: str
    class_name: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    data_key: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    foreign_key: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    path: typing.Union[UnspecifiedType, str] = UNSPECIFIED


RelationshipDeclaration = typing.Union[HasMany, HasOne, BelongsTo]


@dataclasses.dataclass
class Meta:
    relationships: typing.Sequence[RelationshipDeclaration] = ()
    collection_path: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    resource_path: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    primary_key: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    namespace: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    registry: typing.Union[UnspecifiedType, "ModelRegistry"] = UNSPECIFIED
    loader: typing.Union[UnspecifiedType, ResourceLoader] = UNSPECIFIED
    abstract: bool = False


def handle_meta(meta: typing.Optional[typing.Type]) -> Meta:
    if meta is None:
        return Meta()
    attrs = {k: v for k, v in vars(meta).items() if not k.startswith("__")}
    unknown = set(attrs) - {f.name for f in dataclasses.fields(Meta)}
    if unknown:
        raise InvalidDeclarationError(f"unknown Meta options: {', '.join(sorted(unknown))}")
    relationships = attrs.get("relationships", ())
    for decl in relationships:
        if not isinstance(decl, (HasMany, HasOne, BelongsTo)):
            raise InvalidDeclarationError(
                f"every relationship must be HasMany, HasOne or BelongsTo, got {decl!r}"
            )
    return Meta(
        relationships=tuple(relationships),
        collection_path=attrs.get("collection_path", UNSPECIFIED),
        resource_path=attrs.get("resource_path", UNSPECIFIED),
        primary_key=attrs.get("primary_key", UNSPECIFIED),
        namespace=attrs.get("namespace", UNSPECIFIED),
        registry=attrs.get("registry", UNSPECIFIED),
        loader=attrs.get("loader", UNSPECIFIED),
        abstract=bool(attrs.get("abstract", False)),
    )


def build_descriptor(decl: RelationshipDeclaration) -> RelationshipDescriptor:
    """
    Fills the unspecified fields of a declaration with their defaults and
    returns the resulting descriptor.
    """
    name = decl.name
    if not isinstance(name, str) or not name.isidentifier():
        raise InvalidDeclarationError(f"invalid relationship name: {name!r}")

    class_name = maybe_unspecified(decl.class_name, classify(name))
    data_key = maybe_unspecified(decl.data_key, name)

    if isinstance(decl, HasMany):
        return RelationshipDescriptor(
            kind=RelationshipKind.TO_MANY,
            name=name,
            related_type_name=class_name,
            data_key=data_key,
            path_template=maybe_unspecified(decl.path, f"/{name}"),
            inverse_name=maybe_unspecified(decl.inverse_of, None),
        )
    elif isinstance(decl, HasOne):
        return RelationshipDescriptor(
            kind=RelationshipKind.TO_ONE,
            name=name,
            related_type_name=class_name,
            data_key=data_key,
            path_template=maybe_unspecified(decl.path, f"/{name}"),
        )
    elif isinstance(decl, BelongsTo):
        return RelationshipDescriptor(
            kind=RelationshipKind.OWNED_BY,
            name=name,
            related_type_name=class_name,
            data_key=data_key,
            path_template=maybe_unspecified(decl.path, f"/{pluralize(name)}/:id"),
            foreign_key=maybe_unspecified(decl.foreign_key, f"{name}_id"),
        )
    else:
        raise AssertionError("should never get here!")
