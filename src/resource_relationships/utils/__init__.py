from .types import (  # noqa
    UNSPECIFIED,
    UnspecifiedType,
    maybe_unspecified,
)
from .inflection import (  # noqa
    camelize,
    classify,
    pluralize,
    singularize,
    tableize,
    underscore,
)
