from ._sentinel import (
    NoParent,
    NoParentType,
    SingletonType,
    Unset,
    UnsetType,
)
from ._utils import (
    filter_values,
    iter_values,
    now_utc,
    shallow_clone,
    union,
    unique,
)

__all__ = (
    # Sentinel types
    "Unset",
    "NoParent",
    "SingletonType",
    "UnsetType",
    "NoParentType",
    # Collection utilities
    "filter_values",
    "iter_values",
    "now_utc",
    "shallow_clone",
    "union",
    "unique",
)
