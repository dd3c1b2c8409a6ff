# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Super dispatch across an arbitrary-depth blueprint chain.

Every call dispatched against a private context records the level that
defines the running method by swapping the context's ``call_super`` for a
dispatcher bound to that level. ``call_super`` therefore always resolves
"one level above the method currently running", so nested super calls climb
the chain instead of looping on the level right above the instance.

Resolution rule:
    Start at the parent of the defining level and walk upward. The first
    ancestor that directly defines the name as a callable (public member or
    private method) is the target. Inherited definitions do not count, since
    the walk will reach the level that owns them.
"""

import logging
from collections.abc import Callable
from typing import Any

from .exceptions import MethodNotFoundError
from .substrate import ProtoObject, get_prototype, iter_chain
from .types import BLUEPRINT_OPERATIONS, CALL_SUPER, PrivateContext, is_method, private_methods_of

logger = logging.getLogger(__name__)

_MISSING = object()


def defined_method(node: ProtoObject, name: str) -> Callable | None:
    """Return the callable ``node`` itself defines under ``name``, if any."""
    if name in BLUEPRINT_OPERATIONS:
        return None
    own = node.__dict__
    if name in own and is_method(own[name]):
        return own[name]
    private = private_methods_of(node).get(name)
    if is_method(private):
        return private
    return None


def resolve_super(level: ProtoObject, method_name: str) -> tuple[ProtoObject, Callable]:
    """Find the nearest ancestor above ``level`` defining ``method_name``.

    Raises:
        MethodNotFoundError: If no ancestor defines the method
    """
    for ancestor in iter_chain(get_prototype(level)):
        method = defined_method(ancestor, method_name)
        if method is not None:
            return ancestor, method
    raise MethodNotFoundError(method_name)


def invoke(receiver: Any, owner: ProtoObject, method: Callable,
           args: tuple, kwargs: dict) -> Any:
    """Run ``method`` against ``receiver`` as if defined at ``owner``.

    Private contexts get their super dispatcher swapped to ``owner`` for the
    duration of the call. Borrowed receivers are passed through untouched.
    """
    if not isinstance(receiver, PrivateContext):
        return method(receiver, *args, **kwargs)

    own = receiver.__dict__
    previous = own.get(CALL_SUPER, _MISSING)
    own[CALL_SUPER] = SuperDispatcher(owner, receiver)
    try:
        return method(receiver, *args, **kwargs)
    finally:
        if previous is _MISSING:
            own.pop(CALL_SUPER, None)
        else:
            own[CALL_SUPER] = previous


class SuperDispatcher:
    """``call_super`` bound to one level of the chain and one receiver."""

    __slots__ = ("level", "receiver")

    def __init__(self, level: ProtoObject, receiver: Any):
        self.level = level
        self.receiver = receiver

    def __call__(self, method_name: str, *args, **kwargs) -> Any:
        owner, method = resolve_super(self.level, method_name)
        logger.debug("call_super(%r) from %r resolved to %r", method_name, self.level, owner)
        return invoke(self.receiver, owner, method, args, kwargs)

    def __repr__(self) -> str:
        return f"<SuperDispatcher level={self.level!r}>"


def make_call_super(level: ProtoObject) -> Callable:
    """Build the ``call_super`` member installed on blueprints with a parent."""

    def call_super(receiver: Any, method_name: str, *args, **kwargs) -> Any:
        return SuperDispatcher(level, receiver)(method_name, *args, **kwargs)

    return call_super
