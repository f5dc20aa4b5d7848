import logging
import typing

from .exceptions import UnknownModelTypeError
from .interfaces import ResourceLoader, TypeResolver

if typing.TYPE_CHECKING:
    from .model import Model  # noqa: F401

logger = logging.getLogger(__name__)


class ModelRegistry(TypeResolver):
    """
    A :py:class:`ModelRegistry` keeps track of model types by their qualified names
    (``<namespace>.<ClassName>``) and resolves the type names written in
    relationship declarations.  It also carries the loader that model types
    use unless they configure one of their own.
    """

    loader: typing.Optional[ResourceLoader]
    _types: typing.Dict[str, typing.Type["Model"]]
    _types_by_simple_name: typing.Dict[str, typing.List[str]]

    def register(self, model_type: typing.Type["Model"], namespace: str) -> str:
        qualified_name = f"{namespace}.{model_type.__name__}" if namespace else model_type.__name__
        if qualified_name in self._types:
            logger.debug("replacing model type registered as %s", qualified_name)
        else:
            self._types_by_simple_name.setdefault(model_type.__name__, []).append(
                qualified_name
            )
        self._types[qualified_name] = model_type
        return qualified_name

    def lookup(self, qualified_name: str) -> typing.Type["Model"]:
        try:
            return self._types[qualified_name]
        except KeyError:
            raise UnknownModelTypeError(qualified_name)

    def resolve(self, name: str, context: typing.Type["Model"]) -> typing.Type["Model"]:
        """
        Resolves ``name`` relative to the namespace of ``context`` first, then as
        an absolute qualified name, and finally by the bare class name if exactly
        one registered type carries it.
        """
        namespace = context.__resource_namespace__
        candidates = [name]
        if namespace:
            candidates.insert(0, f"{namespace}.{name}")
        for candidate in candidates:
            model_type = self._types.get(candidate)
            if model_type is not None:
                return model_type
        if "." not in name:
            qualified_names = self._types_by_simple_name.get(name, [])
            if len(qualified_names) == 1:
                return self._types[qualified_names[0]]
        raise UnknownModelTypeError(name, namespace)

    def __contains__(self, qualified_name: str) -> bool:
        return qualified_name in self._types

    def __init__(self, loader: typing.Optional[ResourceLoader] = None):
        self.loader = loader
        self._types = {}
        self._types_by_simple_name = {}


default_registry = ModelRegistry()


class TypeHandle:
    """
    A :py:class:`TypeHandle` refers to the related type of a relationship by name.
    The name is resolved on the first call, so the related type may be declared
    after the relationship, and the result is kept for subsequent calls.
    """

    name: str
    context: typing.Type["Model"]
    _resolved: typing.Optional[typing.Type["Model"]] = None

    def __call__(self) -> typing.Type["Model"]:
        if self._resolved is None:
            self._resolved = self.context.__resource_registry__.resolve(self.name, self.context)
        return self._resolved

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, context={self.context.__name__})"

    def __init__(self, name: str, context: typing.Type["Model"]):
        self.name = name
        self.context = context
