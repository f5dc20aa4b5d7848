import dataclasses
import enum
import typing

from .exceptions import InvalidDeclarationError


class RelationshipKind(enum.Enum):
    TO_MANY = "has_many"
    """One-to-many; the related instances are fetched below the owner's path"""
    TO_ONE = "has_one"
    """One-to-one; the related instance is fetched below the owner's path"""
    OWNED_BY = "belongs_to"
    """The owner holds a foreign key to the related instance"""


@dataclasses.dataclass(frozen=True)
class RelationshipDescriptor:
    """
    A :py:class:`RelationshipDescriptor` describes a single declared relationship.
    Descriptors are built once when the relationship is declared and are never
    mutated afterwards; subtypes share them with their ancestors.
    """

    kind: RelationshipKind
    name: str
    """Name of the accessor, and the key under which the resolved value is stored"""
    related_type_name: str
    """Name of the related model type, resolved lazily (may be namespace-relative)"""
    data_key: str
    """Key under which embedded data appears in a payload"""
    path_template: str
    foreign_key: typing.Optional[str] = None
    """Owned-by only: name of the field holding the related identifier"""
    inverse_name: typing.Optional[str] = None
    """To-many only: name of the field set on each child to point back to the owner"""


class UnloadedType:
    _singleton: typing.ClassVar[typing.Optional["UnloadedType"]] = None

    def __bool__(self):
        return False

    def __repr__(self) -> str:
        return "UNLOADED"

    def __new__(cls) -> "UnloadedType":
        if cls._singleton is None:
            cls._singleton = object.__new__(cls)
        return cls._singleton


UNLOADED = UnloadedType()


@dataclasses.dataclass(frozen=True)
class Loaded:
    """
    The state of a relationship whose value has been resolved, either by
    fetching it or by taking it from an embedded payload.  ``value`` may be
    ``None`` or an empty collection; both mean "resolved, nothing related".
    """

    value: typing.Any


RelationshipState = typing.Union[UnloadedType, Loaded]


class Collection(list):
    """
    A list of model instances, along with the metadata and errors the
    remote API returned next to it.
    """

    metadata: typing.Dict[str, typing.Any]
    errors: typing.Dict[str, typing.Any]

    def __init__(
        self,
        items: typing.Iterable[typing.Any] = (),
        metadata: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        errors: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ):
        super().__init__(items)
        self.metadata = dict(metadata) if metadata is not None else {}
        self.errors = dict(errors) if errors is not None else {}


class RelationshipTable:
    """
    A :py:class:`RelationshipTable` holds the relationships declared on a model type,
    grouped by kind and kept in declaration order.
    """

    _entries: typing.Dict[RelationshipKind, typing.List[RelationshipDescriptor]]
    _declared: typing.Set[str]

    def __iter__(self) -> typing.Iterator[RelationshipDescriptor]:
        for kind in RelationshipKind:
            yield from self._entries.get(kind, ())

    def __len__(self) -> int:
        return sum(len(descrs) for descrs in self._entries.values())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(descr.name for descr in self)})"

    def items(
        self,
    ) -> typing.Iterable[typing.Tuple[RelationshipKind, typing.Sequence[RelationshipDescriptor]]]:
        return [(kind, tuple(descrs)) for kind, descrs in self._entries.items()]

    def of_kind(self, kind: RelationshipKind) -> typing.Sequence[RelationshipDescriptor]:
        return tuple(self._entries.get(kind, ()))

    def names(self) -> typing.AbstractSet[str]:
        return {descr.name for descr in self}

    def find(self, name: str) -> typing.Optional[RelationshipDescriptor]:
        for descr in self:
            if descr.name == name:
                return descr
        return None

    def add(self, descr: RelationshipDescriptor) -> None:
        """
        Appends ``descr``.  A relationship inherited from the parent table is
        overridden: it is replaced in place when the kind is unchanged, and
        dropped otherwise.

        :raises InvalidDeclarationError: if the name was already added to this table.
        """
        if descr.name in self._declared:
            raise InvalidDeclarationError(f"relationship {descr.name} is already declared")
        self._declared.add(descr.name)
        for kind, descrs in self._entries.items():
            for i, inherited in enumerate(descrs):
                if inherited.name != descr.name:
                    continue
                if kind is descr.kind:
                    descrs[i] = descr
                    return
                del descrs[i]
                break
        self._entries.setdefault(descr.kind, []).append(descr)

    @classmethod
    def derive_from(cls, parent: typing.Optional["RelationshipTable"]) -> "RelationshipTable":
        """
        Creates a table that starts out with the parent's relationships.
        The lists are copied, so adding to the derived table leaves the
        parent untouched.
        """
        table = cls()
        if parent is not None:
            table._entries = {kind: list(descrs) for kind, descrs in parent._entries.items()}
        return table

    def __init__(self):
        self._entries = {}
        self._declared = set()
