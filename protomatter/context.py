# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Private context construction.

Each instance gets exactly one private context: a hidden receiver that
delegates to the instance, holds instance state and private methods, and is
substituted for the receiver of every public call.

Receiver rule (public wrappers and bound private methods alike):
    - plain call                          -> private context
    - call_with(None | instance | context) -> private context
    - call_with(anything else)            -> that object, borrowed as-is
"""

import logging
from collections.abc import Callable
from typing import Any

from .dispatch import SuperDispatcher, invoke
from .substrate import ProtoObject, find_owner, get_prototype, hide, iter_chain
from .types import (
    BLUEPRINT_OPERATIONS,
    CALL_SUPER,
    PUBLIC,
    Blueprint,
    Instance,
    PrivateContext,
    instance_of,
    is_method,
    private_methods_of,
    statics_of,
)

logger = logging.getLogger(__name__)


class PublicMethod:
    """Instance-side wrapper for a blueprint method.

    The method is looked up on the instance's current blueprint at every call,
    so replacing it on the blueprint is visible to existing instances.
    """

    __slots__ = ("name", "_instance", "_context")

    def __init__(self, name: str, instance: Instance, context: PrivateContext):
        self.name = name
        self._instance = instance
        self._context = context

    def __call__(self, *args, **kwargs) -> Any:
        return self.call_with(None, *args, **kwargs)

    def call_with(self, receiver: Any, *args, **kwargs) -> Any:
        """Call the method against ``receiver`` instead of the private context."""
        owner = find_owner(get_prototype(self._instance), self.name)
        if owner is None:
            raise AttributeError(f"{self.name!r} is no longer defined on the blueprint")
        method = owner.__dict__[self.name]
        if receiver is None or receiver is self._instance or receiver is self._context:
            receiver = self._context
        return invoke(receiver, owner, method, args, kwargs)

    def __repr__(self) -> str:
        return f"<PublicMethod {self.name}>"


class BoundMethod:
    """Callable soft-bound to a private context.

    Used for private methods and mixed-in functions. A reference that escapes
    still runs against its context unless another receiver is given
    explicitly.
    """

    __slots__ = ("__wrapped__", "owner", "_context")

    def __init__(self, method: Callable, owner: ProtoObject, context: PrivateContext):
        self.__wrapped__ = method
        self.owner = owner
        self._context = context

    def __call__(self, *args, **kwargs) -> Any:
        return self.call_with(None, *args, **kwargs)

    def call_with(self, receiver: Any, *args, **kwargs) -> Any:
        context = self._context
        if receiver is None or receiver is context or receiver is instance_of(context):
            receiver = context
        return invoke(receiver, self.owner, self.__wrapped__, args, kwargs)

    def __repr__(self) -> str:
        name = getattr(self.__wrapped__, "__name__", type(self.__wrapped__).__name__)
        return f"<BoundMethod {name}>"


def _install_private_members(context: PrivateContext, blueprint: Blueprint) -> None:
    own = context.__dict__
    # Nearest level wins; reserved context keys are never overwritten
    for level in iter_chain(blueprint):
        for name, member in private_methods_of(level).items():
            if name in own:
                continue
            own[name] = BoundMethod(member, level, context) if is_method(member) else member


def _install_public_wrappers(instance: Instance, context: PrivateContext,
                             blueprint: Blueprint) -> int:
    seen: set[str] = set()
    wrapped = 0
    for level in iter_chain(blueprint):
        statics = statics_of(level)
        for name, member in level.__dict__.items():
            if name in seen:
                continue
            seen.add(name)
            if name in BLUEPRINT_OPERATIONS or name in statics:
                hide(instance, name)
            elif is_method(member):
                instance.__dict__[name] = PublicMethod(name, instance, context)
                wrapped += 1

    if find_owner(blueprint, CALL_SUPER) is not None:
        def call_super(method_name: str, *args, **kwargs) -> Any:
            return context.call_super(method_name, *args, **kwargs)

        instance.__dict__[CALL_SUPER] = call_super
    return wrapped


def build_context(instance: Instance, blueprint: Blueprint) -> PrivateContext:
    """Build the private context for a freshly created ``instance``."""
    context = PrivateContext(instance)
    own = context.__dict__
    own[PUBLIC] = instance
    own[CALL_SUPER] = SuperDispatcher(blueprint, context)

    _install_private_members(context, blueprint)
    wrapped = _install_public_wrappers(instance, context, blueprint)
    logger.debug("Built private context for %r: %d public wrappers", blueprint, wrapped)
    return context
