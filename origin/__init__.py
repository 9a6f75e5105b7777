# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging

from . import ln as ln
from ._errors import AncestorNotFoundError, FrozenClassError, OriginError
from .config import settings
from .generic import (
    ClassDescriptor,
    ClassOptions,
    OriginClass,
    OriginObject,
    Root,
    SuperShims,
    compose,
    extend,
    get_class,
    registered_classes,
)
from .ln import NoParent
from .protocols import Binding, Event, Registration, Responder
from .version import __version__

logger = logging.getLogger(__name__)
logger.setLevel(settings.log_level)

__all__ = (
    "__version__",
    "AncestorNotFoundError",
    "Binding",
    "ClassDescriptor",
    "ClassOptions",
    "Event",
    "FrozenClassError",
    "NoParent",
    "OriginClass",
    "OriginError",
    "OriginObject",
    "Registration",
    "Responder",
    "Root",
    "SuperShims",
    "compose",
    "extend",
    "get_class",
    "ln",
    "logger",
    "registered_classes",
    "settings",
)
