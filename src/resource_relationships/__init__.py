from .declarative import BelongsTo, HasMany, HasOne  # noqa
from .exceptions import (  # noqa
    InvalidDeclarationError,
    LoaderNotConfiguredError,
    PathError,
    ResourceRelationshipsException,
    UnknownModelTypeError,
)
from .interfaces import ResourceLoader, TypeResolver  # noqa
from .model import Model, has_relationship, relationships_of  # noqa
from .models import (  # noqa
    UNLOADED,
    Collection,
    Loaded,
    RelationshipDescriptor,
    RelationshipKind,
    RelationshipTable,
)
from .registry import ModelRegistry, default_registry  # noqa
