"""
resource_relationships.model contains :py:class:`Model`, the base class of
every type backed by a remote resource.

Synopsis
--------

.. code-block:: python

   from resource_relationships import BelongsTo, HasMany, Model, ModelRegistry

   registry = ModelRegistry(loader=RequestsResourceLoader("https://api.example.com"))

   class User(Model):
       class Meta:
           registry = registry
           relationships = [
               HasMany("articles"),
               BelongsTo("team", class_name="Group"),
           ]

   class Article(Model):
       class Meta:
           registry = registry

   class Group(Model):
       class Meta:
           registry = registry

   user = User(id=1, team_id=5)
   user.articles()  # GET /users/1/articles
   user.team()      # GET /teams/5

"""
import typing

from .accessors import create_accessor
from .declarative import (
    BelongsTo,
    HasMany,
    HasOne,
    RelationshipDeclaration,
    build_descriptor,
    handle_meta,
)
from .exceptions import InvalidDeclarationError, LoaderNotConfiguredError
from .interfaces import ResourceLoader
from .models import (
    UNLOADED,
    Collection,
    Loaded,
    RelationshipDescriptor,
    RelationshipKind,
    RelationshipState,
    RelationshipTable,
)
from .paths import ResourcePaths
from .registry import ModelRegistry, default_registry
from .utils import maybe_unspecified, tableize

M = typing.TypeVar("M", bound="Model")


class Model:
    __resource_registry__: typing.ClassVar[ModelRegistry] = default_registry
    __resource_loader__: typing.ClassVar[typing.Optional[ResourceLoader]] = None
    __resource_namespace__: typing.ClassVar[str] = ""
    __resource_paths__: typing.ClassVar[ResourcePaths] = ResourcePaths("", "/:id")
    __relationships__: typing.ClassVar[RelationshipTable] = RelationshipTable()

    data: typing.Dict[str, typing.Any]

    def __init_subclass__(cls, **kwargs: typing.Any) -> None:
        super().__init_subclass__(**kwargs)
        meta = handle_meta(cls.__dict__.get("Meta"))

        # attributes looked up here still resolve to the nearest ancestor's
        cls.__relationships__ = RelationshipTable.derive_from(cls.__relationships__)
        cls.__resource_registry__ = maybe_unspecified(meta.registry, cls.__resource_registry__)
        cls.__resource_loader__ = maybe_unspecified(meta.loader, cls.__resource_loader__)
        cls.__resource_namespace__ = maybe_unspecified(meta.namespace, cls.__module__)

        collection_path = maybe_unspecified(meta.collection_path, f"/{tableize(cls.__name__)}")
        cls.__resource_paths__ = ResourcePaths(
            collection_path=collection_path,
            resource_path=maybe_unspecified(meta.resource_path, f"{collection_path}/:id"),
            primary_key=maybe_unspecified(meta.primary_key, cls.__resource_paths__.primary_key),
        )

        if not meta.abstract:
            cls.__resource_registry__.register(cls, cls.__resource_namespace__)

        for decl in meta.relationships:
            cls.declare_relationship(decl)

    @classmethod
    def declare_relationship(cls, decl: RelationshipDeclaration) -> RelationshipDescriptor:
        if cls is Model:
            raise InvalidDeclarationError("relationships cannot be declared on Model itself")
        descr = build_descriptor(decl)
        if descr.name == "data" or hasattr(Model, descr.name):
            raise InvalidDeclarationError(
                f"relationship {descr.name} would shadow Model.{descr.name}"
            )
        cls.__relationships__.add(descr)
        setattr(cls, descr.name, create_accessor(descr, cls))
        return descr

    @classmethod
    def has_many(cls, name: str, **options: typing.Any) -> RelationshipDescriptor:
        """
        Declares a one-to-many relationship, fetched from ``<resource path>/<name>``.

        :param str name: the name of the relationship.
        :param options: ``class_name``, ``data_key``, ``path`` and ``inverse_of``.
        """
        return cls.declare_relationship(HasMany(name, **options))

    @classmethod
    def has_one(cls, name: str, **options: typing.Any) -> RelationshipDescriptor:
        """
        Declares a one-to-one relationship, fetched from ``<resource path>/<name>``.

        :param str name: the name of the relationship.
        :param options: ``class_name``, ``data_key`` and ``path``.
        """
        return cls.declare_relationship(HasOne(name, **options))

    @classmethod
    def belongs_to(cls, name: str, **options: typing.Any) -> RelationshipDescriptor:
        """
        Declares that instances are owned by another resource, identified by
        the ``<name>_id`` field and fetched from ``/<pluralized name>/:id``.

        :param str name: the name of the relationship.
        :param options: ``class_name``, ``data_key``, ``foreign_key`` and ``path``.
        """
        return cls.declare_relationship(BelongsTo(name, **options))

    @classmethod
    def relationships(cls) -> RelationshipTable:
        return cls.__relationships__

    @classmethod
    def parse_relationships(
        cls, data: typing.Dict[str, typing.Any]
    ) -> typing.Dict[str, typing.Any]:
        """
        Replaces, in place, the embedded data of every declared relationship
        with model instances.  The data is read from the relationship's data key,
        or from its name when the data key is absent; relationships found under
        neither are left alone.
        """
        for descr in cls.__relationships__:
            if descr.data_key in data:
                raw = data[descr.data_key]
            elif descr.name in data:
                raw = data[descr.name]
            else:
                continue
            if raw is None:
                data[descr.name] = None
                continue
            related_type = getattr(cls, descr.name).related_type()
            if descr.kind is RelationshipKind.TO_MANY:
                data[descr.name] = related_type.build_collection(raw)
            else:
                data[descr.name] = related_type.new(raw)
        return data

    @classmethod
    def new(cls: typing.Type[M], raw: typing.Any) -> M:
        if isinstance(raw, Model):
            return typing.cast(M, raw)
        return cls(raw)

    @classmethod
    def build_collection(
        cls,
        items: typing.Iterable[typing.Any],
        metadata: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        errors: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ) -> Collection:
        return Collection((cls.new(item) for item in items), metadata=metadata, errors=errors)

    @classmethod
    def build_request_path(
        cls, fields: typing.Mapping[str, typing.Any], template: typing.Optional[str] = None
    ) -> str:
        return cls.__resource_paths__.build_request_path(fields, template)

    @classmethod
    def loader(cls) -> ResourceLoader:
        loader = cls.__resource_loader__ or cls.__resource_registry__.loader
        if loader is None:
            raise LoaderNotConfiguredError(cls)
        return loader

    @classmethod
    def get_collection(
        cls, path: str, params: typing.Optional[typing.Mapping[str, typing.Any]] = None
    ) -> Collection:
        return cls.loader().fetch_collection(cls, path, params or {})

    @classmethod
    def get_resource(
        cls: typing.Type[M],
        path: str,
        params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ) -> typing.Optional[M]:
        return cls.loader().fetch_resource(cls, path, params or {})

    def relation_state(self, name: str) -> RelationshipState:
        """
        Tells whether the relationship ``name`` is known, reading ``data`` only:
        a relationship is loaded when its name is a key of ``data``.  A to-many
        relationship stored as ``None`` is not, since its known-empty value is
        the empty collection.
        """
        if name not in self.data:
            return UNLOADED
        value = self.data[name]
        if value is None:
            descr = type(self).__relationships__.find(name)
            if descr is not None and descr.kind is RelationshipKind.TO_MANY:
                return UNLOADED
        return Loaded(value)

    def set_related(self, name: str, value: typing.Any) -> None:
        self.data[name] = value

    def has_relationship(self, name: str) -> bool:
        return name in type(self).__relationships__.names()

    def get_relationship(self, name: str) -> typing.Any:
        if not self.has_relationship(name):
            return None
        return getattr(self, name)()

    def __getattr__(self, name: str) -> typing.Any:
        data = self.__dict__.get("data")
        if data is None or name not in data:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return data[name]

    def __setattr__(self, name: str, value: typing.Any) -> None:
        if name.startswith("_") or name == "data":
            object.__setattr__(self, name, value)
        elif self.has_relationship(name):
            self.set_related(name, value)
        else:
            self.data[name] = value

    def __repr__(self) -> str:
        names = type(self).__relationships__.names()
        fields = ", ".join(f"{k}={v!r}" for k, v in self.data.items() if k not in names)
        return f"{type(self).__name__}({fields})"

    def __init__(
        self, data: typing.Optional[typing.Mapping[str, typing.Any]] = None, **fields: typing.Any
    ):
        self.data = type(self).parse_relationships({**(data or {}), **fields})


def relationships_of(model_type: typing.Type[Model]) -> RelationshipTable:
    return model_type.__relationships__


def has_relationship(instance: Model, name: str) -> bool:
    return instance.has_relationship(name)
