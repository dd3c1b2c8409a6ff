# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Node types shared by the blueprint factory, context builder and dispatcher."""

from collections.abc import Mapping
from typing import Any

from .substrate import ProtoObject, get_prototype

# Blueprint operations that are never wrapped onto instances. ``mix_in`` is
# deliberately absent: it runs against the private context like any method.
INSTANTIATE = "instantiate"
EXTEND = "extend"
IS_PROTOTYPE_OF = "is_prototype_of"
CALL_SUPER = "call_super"
MIX_IN = "mix_in"

BLUEPRINT_OPERATIONS = frozenset({INSTANTIATE, EXTEND, IS_PROTOTYPE_OF, CALL_SUPER})

# Back-reference from a private context to its instance
PUBLIC = "public"
ALLOW_MIXINS = "allow_mixins"

INIT = "init"
LEGACY_INIT = "initialize"


class Blueprint(ProtoObject):
    """Shared type definition: public members plus a hidden private surface."""

    __slots__ = ("_private_methods", "_statics", "_allow_mixins")

    def __init__(self, proto: ProtoObject | None = None,
                 properties: Mapping[str, Any] | None = None,
                 private_methods: Mapping[str, Any] | None = None,
                 statics: Mapping[str, Any] | None = None,
                 allow_mixins: bool = True):
        super().__init__(proto, properties)
        object.__setattr__(self, "_private_methods", dict(private_methods or {}))
        object.__setattr__(self, "_statics", frozenset(statics or ()))
        if statics:
            self.__dict__.update(statics)
        object.__setattr__(self, "_allow_mixins", allow_mixins)


class Instance(ProtoObject):
    """Object produced by ``Blueprint.instantiate``; delegates to its blueprint."""

    __slots__ = ()


class PrivateContext(ProtoObject):
    """Hidden per-instance receiver; delegates to its instance."""

    __slots__ = ()


def private_methods_of(node: ProtoObject) -> dict[str, Any]:
    if isinstance(node, Blueprint):
        return node._private_methods
    return {}


def statics_of(node: ProtoObject) -> frozenset[str]:
    if isinstance(node, Blueprint):
        return node._statics
    return frozenset()


def instance_of(context: PrivateContext) -> Instance:
    return get_prototype(context)


def is_method(value: Any) -> bool:
    """Members are data unless they are plain callables; classes count as data."""
    return callable(value) and not isinstance(value, type)
