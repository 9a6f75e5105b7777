from .composer import (
    ClassOptions,
    OriginClass,
    OriginObject,
    Root,
    compose,
    extend,
    get_class,
    registered_classes,
)
from .descriptor import ClassDescriptor, Member
from .dispatch import BoundMember, SuperShims

__all__ = (
    "BoundMember",
    "ClassDescriptor",
    "ClassOptions",
    "Member",
    "OriginClass",
    "OriginObject",
    "Root",
    "SuperShims",
    "compose",
    "extend",
    "get_class",
    "registered_classes",
)
