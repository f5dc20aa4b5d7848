import abc
import typing


class ResourceRelationshipsException(Exception, metaclass=abc.ABCMeta):
    message: str

    def __str__(self):
        return self.message


class InvalidDeclarationError(ResourceRelationshipsException):
    def __init__(self, message: str):
        self.message = message


class PathError(ResourceRelationshipsException):
    """
    Raised when a path template has a placeholder that cannot be filled
    from the supplied parameters.
    """

    path: str
    placeholder: str
    parameters: typing.Mapping[str, typing.Any]

    @property
    def message(self):
        return (
            f"missing :{self.placeholder} parameter to build the request path. "
            f"path is `{self.path}`, parameters are {sorted(self.parameters)!r}"
        )

    def __init__(
        self, path: str, placeholder: str, parameters: typing.Mapping[str, typing.Any]
    ):
        self.path = path
        self.placeholder = placeholder
        self.parameters = parameters


class UnknownModelTypeError(ResourceRelationshipsException):
    name: str
    namespace: typing.Optional[str]

    @property
    def message(self):
        if self.namespace is None:
            return f'no model type known as "{self.name}"'
        else:
            return f'no model type known as "{self.name}" (looked up from {self.namespace})'

    def __init__(self, name: str, namespace: typing.Optional[str] = None):
        self.name = name
        self.namespace = namespace


class LoaderNotConfiguredError(ResourceRelationshipsException):
    model_type: typing.Type

    @property
    def message(self):
        return f"no resource loader is configured for {self.model_type.__name__}"

    def __init__(self, model_type: typing.Type):
        self.model_type = model_type
