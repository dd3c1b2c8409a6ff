# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Blueprint factory.

A blueprint is a delegation node carrying public members, a private-method
mapping kept off the public surface, and the operations ``instantiate``,
``extend``, ``mix_in`` and ``is_prototype_of``. Those operations are ordinary
members, so they follow the same late-binding and override rules as user
methods.

Methods receive their receiver explicitly as the first argument:

    Counter = create({
        "init": lambda ctx: setattr(ctx, "count", 0),
        "increment": increment,
        "get_count": lambda ctx: ctx.count,
    })
    counter = Counter.instantiate()
"""

import functools
import logging
from collections.abc import Callable, Mapping
from typing import Any

from .context import BoundMethod, build_context
from .dispatch import invoke, make_call_super
from .exceptions import ConfigurationError, MixinsDisabledError
from .settings import get_config
from .substrate import ProtoObject, has_own, is_object_like, is_prototype_of, lookup
from .types import (
    ALLOW_MIXINS,
    CALL_SUPER,
    EXTEND,
    INIT,
    INSTANTIATE,
    IS_PROTOTYPE_OF,
    MIX_IN,
    PUBLIC,
    Blueprint,
    Instance,
    PrivateContext,
    is_method,
)

logger = logging.getLogger(__name__)

PropertyBag = Mapping[str, Any] | Callable[[], Mapping[str, Any]] | None


def _resolve_properties(properties: PropertyBag) -> dict[str, Any]:
    if properties is None:
        return {}
    if callable(properties) and not isinstance(properties, Mapping):
        properties = properties()
    if not isinstance(properties, Mapping):
        raise ConfigurationError(
            f"Blueprint properties must be a mapping, got {type(properties).__name__}"
        )
    return dict(properties)


def pop_section(members: dict[str, Any], key: str) -> dict[str, Any]:
    if key not in members:
        return {}
    section = members.pop(key)
    if not isinstance(section, Mapping):
        raise ConfigurationError(
            f"Blueprint '{key}' section must be a mapping, got {type(section).__name__}"
        )
    return dict(section)


def mix_in(receiver: Any, mixin: Mapping[str, Any]) -> None:
    """Add capabilities to one instance's visible surface.

    Callables are bound to the receiver (the private context on an ordinary
    call), data is copied as-is. Members land on the receiver's ``public``
    object when it has one.

    Raises:
        ConfigurationError: If ``mixin`` is not a mapping
        MixinsDisabledError: If the owning blueprint disallows mixins
    """
    if not isinstance(mixin, Mapping):
        raise ConfigurationError(f"Mixin must be a mapping, got {type(mixin).__name__}")
    if not getattr(receiver, ALLOW_MIXINS, True):
        raise MixinsDisabledError("Mixins are not allowed for this blueprint.")

    target = getattr(receiver, PUBLIC, receiver)
    for name, member in mixin.items():
        if not is_method(member):
            setattr(target, name, member)
        elif isinstance(receiver, PrivateContext) and isinstance(target, ProtoObject):
            setattr(target, name, BoundMethod(member, target, receiver))
        else:
            setattr(target, name, functools.partial(member, receiver))
    logger.debug("Mixed %d members into %r", len(mixin), target)


def _make_instantiate(blueprint: Blueprint) -> Callable[..., Instance]:
    def instantiate(*args, **kwargs) -> Instance:
        instance = Instance(blueprint)
        context = build_context(instance, blueprint)
        setattr(context, ALLOW_MIXINS, blueprint._allow_mixins)

        init = lookup(blueprint, INIT, None)
        if not is_method(init):
            return instance
        logger.debug("Running %s init for %r", "own" if has_own(blueprint, INIT) else "inherited", instance)
        if has_own(blueprint, INIT):
            invoke(context, blueprint, init, args, kwargs)
        else:
            context.call_super(INIT, *args, **kwargs)
        return instance

    return instantiate


def _make_extend(blueprint: Blueprint) -> Callable[..., Blueprint]:
    def extend(properties: PropertyBag = None, **options) -> Blueprint:
        options["super_proto"] = blueprint
        return create(properties, **options)

    return extend


def create(properties: PropertyBag = None, *, super_proto: ProtoObject | None = None,
           allow_mixins: bool | None = None) -> Blueprint:
    """Create a blueprint from a property bag.

    Args:
        properties: Mapping of members, or a zero-argument callable returning one.
            The configured private key (default ``private``) holds private
            methods; the statics key (default ``statics``) holds members that
            stay on the blueprint and are hidden on instances.
        super_proto: Parent blueprint (any ``ProtoObject``) to delegate to
        allow_mixins: Whether instances accept ``mix_in`` (default from settings)

    Returns:
        New Blueprint

    Raises:
        ConfigurationError: For a non-object ``super_proto`` or a malformed
            reserved section
    """
    config = get_config()
    if super_proto is not None and not is_object_like(super_proto):
        raise ConfigurationError(
            "Given super_proto is not an object.",
            details=[f"Got {type(super_proto).__name__}; expected a blueprint or ProtoObject"],
        )

    members = _resolve_properties(properties)
    private_methods = pop_section(members, config.private_key)
    statics = pop_section(members, config.statics_key)
    if allow_mixins is None:
        allow_mixins = config.allow_mixins

    blueprint = Blueprint(
        super_proto,
        members,
        private_methods=private_methods,
        statics=statics,
        allow_mixins=allow_mixins,
    )

    own = blueprint.__dict__
    own[INSTANTIATE] = _make_instantiate(blueprint)
    own[EXTEND] = _make_extend(blueprint)
    own[MIX_IN] = mix_in
    own[IS_PROTOTYPE_OF] = functools.partial(is_prototype_of, blueprint)
    if super_proto is not None:
        own[CALL_SUPER] = make_call_super(blueprint)

    logger.debug(
        "Created blueprint: %d public, %d private, %d statics, parent=%r",
        len(members), len(private_methods), len(statics), super_proto,
    )
    return blueprint
