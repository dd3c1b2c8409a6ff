# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Single-parent delegation substrate.

A ``ProtoObject`` owns a plain attribute dictionary and an optional parent
node. Reading an attribute the node does not own walks the parent chain until
some node owns it. Values are returned exactly as stored: the substrate never
binds functions to the node they were read through.

A node may also *hide* a name. Lookup through a hiding node stops there and
fails, even when an ancestor defines the name, which is how instances mask
blueprint machinery.

Usage:
    from protomatter.substrate import create_object, get_prototype

    base = create_object(None, {"greeting": "hello"})
    child = create_object(base)
    child.greeting          # "hello"
    get_prototype(child)    # base
"""

from collections.abc import Iterator, Mapping
from typing import Any, Optional

_MISSING = object()


class ProtoObject:
    """Delegation node. Defines no public names of its own."""

    __slots__ = ("_proto", "_hidden", "__dict__")

    def __init__(self, proto: Optional["ProtoObject"] = None,
                 properties: Mapping[str, Any] | None = None):
        object.__setattr__(self, "_proto", proto)
        object.__setattr__(self, "_hidden", set())
        if properties:
            self.__dict__.update(properties)

    def __getattr__(self, name: str) -> Any:
        # Only reached when the node does not own ``name``
        if name.startswith("__") and name.endswith("__") or name in ("_proto", "_hidden"):
            raise AttributeError(name)
        if name in self._hidden:
            raise AttributeError(f"{name!r} is hidden on {self!r}")

        node = self._proto
        while node is not None:
            own = node.__dict__
            if name in own:
                return own[name]
            if name in node._hidden:
                break
            node = node._proto
        raise AttributeError(f"{type(self).__name__} has no attribute {name!r}")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} keys={sorted(self.__dict__)}>"


def is_object_like(value: Any) -> bool:
    return isinstance(value, ProtoObject)


def create_object(proto: ProtoObject | None = None,
                  properties: Mapping[str, Any] | None = None) -> ProtoObject:
    """Create a plain node delegating to ``proto``."""
    if proto is not None and not is_object_like(proto):
        raise TypeError(f"Prototype must be a ProtoObject or None, got {type(proto).__name__}")
    return ProtoObject(proto, properties)


def get_prototype(node: ProtoObject) -> ProtoObject | None:
    return node._proto


def set_prototype(node: ProtoObject, proto: ProtoObject | None) -> None:
    """Re-parent ``node``, refusing to create a cycle."""
    if proto is not None:
        if not is_object_like(proto):
            raise TypeError(f"Prototype must be a ProtoObject or None, got {type(proto).__name__}")
        if proto is node or is_prototype_of(node, proto):
            raise ValueError("Cyclic delegation chain")
    object.__setattr__(node, "_proto", proto)


def iter_chain(node: ProtoObject | None) -> Iterator[ProtoObject]:
    """Yield ``node`` and then every ancestor, nearest first."""
    while node is not None:
        yield node
        node = node._proto


def own_keys(node: ProtoObject) -> list[str]:
    return list(node.__dict__)


def has_own(node: ProtoObject, name: str) -> bool:
    return name in node.__dict__


def hide(node: ProtoObject, name: str) -> None:
    node._hidden.add(name)


def find_owner(node: ProtoObject | None, name: str) -> ProtoObject | None:
    """Return the nearest node on the chain owning ``name``, honouring hidden names."""
    for current in iter_chain(node):
        if name in current.__dict__:
            return current
        if name in current._hidden:
            return None
    return None


def lookup(node: ProtoObject | None, name: str, default: Any = _MISSING) -> Any:
    """Resolve ``name`` on the chain without raising when ``default`` is given."""
    owner = find_owner(node, name)
    if owner is not None:
        return owner.__dict__[name]
    if default is _MISSING:
        raise AttributeError(name)
    return default


def is_prototype_of(proto: ProtoObject, node: Any) -> bool:
    """Whether ``proto`` appears above ``node`` on its delegation chain."""
    if not is_object_like(node):
        return False
    return any(ancestor is proto for ancestor in iter_chain(node._proto))
