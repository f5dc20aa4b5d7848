"""
Relationship accessors are installed on a model type, one per declared
relationship, under the relationship's name.  Reading the attribute from an
instance yields a callable; calling it resolves the relationship:

.. code-block:: python

   user.articles()               # fetched once, then reused
   user.articles({"page": 2})    # parameters always force a fresh fetch

"""
import abc
import logging
import types
import typing

from .exceptions import PathError
from .models import Loaded, RelationshipDescriptor, RelationshipKind
from .paths import expand_path
from .registry import TypeHandle
from .utils import singularize, underscore

if typing.TYPE_CHECKING:
    from .model import Model  # noqa: F401

logger = logging.getLogger(__name__)

Params = typing.Mapping[str, typing.Any]


class RelationshipAccessor(metaclass=abc.ABCMeta):
    descr: RelationshipDescriptor
    related_type: TypeHandle

    @abc.abstractmethod
    def build_path(self, instance: "Model", params: Params) -> str:
        """
        Builds the request path for the relationship of ``instance``.

        :raises PathError: if the path cannot be built from the instance's fields.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def fetch(self, path: str, params: Params) -> typing.Any:
        ...  # pragma: nocover

    def loaded(self, instance: "Model", value: typing.Any) -> typing.Any:
        return value

    def __call__(self, instance: "Model", params: typing.Optional[Params] = None) -> typing.Any:
        name = self.descr.name
        params = dict(params) if params else {}
        state = instance.relation_state(name)
        if isinstance(state, Loaded) and not params:
            logger.debug("reusing %s of %r", name, instance)
            return self.loaded(instance, state.value)

        try:
            path = self.build_path(instance, params)
        except PathError as e:
            logger.debug("not resolving %s of %r: %s", name, instance, e.message)
            return None

        logger.debug("fetching %s of %r from %s", name, instance, path)
        value = self.fetch(path, params)
        instance.set_related(name, value)
        return self.loaded(instance, value)

    def __get__(self, instance: typing.Optional["Model"], owner: typing.Type["Model"]):
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.descr.name!r}, {self.descr.related_type_name!r})"

    def __init__(self, descr: RelationshipDescriptor, owner: typing.Type["Model"]):
        self.descr = descr
        self.related_type = TypeHandle(descr.related_type_name, owner)


class ToManyAccessor(RelationshipAccessor):
    def build_path(self, instance: "Model", params: Params) -> str:
        return type(instance).build_request_path(
            {**instance.data, **params},
            template=type(instance).__resource_paths__.resource_path + self.descr.path_template,
        )

    def fetch(self, path: str, params: Params) -> typing.Any:
        return self.related_type().get_collection(path, params)

    def inverse_name_for(self, instance: "Model") -> str:
        if self.descr.inverse_name is not None:
            return self.descr.inverse_name
        return singularize(underscore(type(instance).__name__))

    def loaded(self, instance: "Model", value: typing.Any) -> typing.Any:
        if value is not None:
            inverse_name = self.inverse_name_for(instance)
            for child in value:
                child.set_related(inverse_name, instance)
        return value


class ToOneAccessor(RelationshipAccessor):
    def build_path(self, instance: "Model", params: Params) -> str:
        return type(instance).build_request_path(
            {**instance.data, **params},
            template=type(instance).__resource_paths__.resource_path + self.descr.path_template,
        )

    def fetch(self, path: str, params: Params) -> typing.Any:
        return self.related_type().get_resource(path, params)


class OwnedByAccessor(RelationshipAccessor):
    def build_path(self, instance: "Model", params: Params) -> str:
        foreign_key = self.descr.foreign_key
        assert foreign_key is not None
        return expand_path(
            self.descr.path_template,
            {**instance.data, **params, "id": instance.data.get(foreign_key)},
        )

    def fetch(self, path: str, params: Params) -> typing.Any:
        return self.related_type().get_resource(path, params)


ACCESSOR_CLASSES: typing.Mapping[RelationshipKind, typing.Type[RelationshipAccessor]] = {
    RelationshipKind.TO_MANY: ToManyAccessor,
    RelationshipKind.TO_ONE: ToOneAccessor,
    RelationshipKind.OWNED_BY: OwnedByAccessor,
}


def create_accessor(
    descr: RelationshipDescriptor, owner: typing.Type["Model"]
) -> RelationshipAccessor:
    return ACCESSOR_CLASSES[descr.kind](descr, owner)
