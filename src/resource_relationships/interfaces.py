"""
This module contains the interfaces of the collaborators the relationship
accessors call into: a loader that performs the actual remote requests,
and a resolver that turns a declared type name into a model type.

"""
import abc
import typing

if typing.TYPE_CHECKING:
    from .model import Model  # noqa: F401
    from .models import Collection  # noqa: F401


class ResourceLoader(metaclass=abc.ABCMeta):
    """
    A :py:class:`ResourceLoader` fetches remote resources and turns the responses
    into model instances.  Network and decode errors are the loader's own and
    are expected to propagate to the caller as they are.
    """

    @abc.abstractmethod
    def fetch_collection(
        self,
        model_type: typing.Type["Model"],
        path: str,
        params: typing.Mapping[str, typing.Any],
    ) -> "Collection":
        """
        Fetches the collection found at ``path``.

        :param Type[Model] model_type: the type of the instances in the collection.
        :param str path: the fully expanded request path.
        :param Mapping[str, Any] params: request parameters.
        :return: the collection, possibly empty.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def fetch_resource(
        self,
        model_type: typing.Type["Model"],
        path: str,
        params: typing.Mapping[str, typing.Any],
    ) -> typing.Optional["Model"]:
        """
        Fetches the single resource found at ``path``.

        :param Type[Model] model_type: the type of the resource.
        :param str path: the fully expanded request path.
        :param Mapping[str, Any] params: request parameters.
        :return: the instance, or None if the remote side returned nothing.
        """
        ...  # pragma: nocover


class TypeResolver(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def resolve(self, name: str, context: typing.Type["Model"]) -> typing.Type["Model"]:
        """
        Resolves a type name, as written in a relationship declaration on ``context``,
        to a model type.
        """
        ...  # pragma: nocover
