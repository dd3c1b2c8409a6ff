# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Multi-blueprint composition.

Merges the public and private surfaces of several sources into one blueprint
and chains their initializers. Sources are blueprints (their whole chain is
flattened, furthest ancestor first) or plain property bags. Later sources win
on name clashes.

Composition flattens: the composed blueprint has no parent unless one is
passed via ``super_proto``. Members taken from a non-root level of a source
chain are wrapped in ``AnchoredMethod`` so ``call_super`` inside them still
climbs that source's own ancestors. Members of a root level resolve
``call_super`` against the composed blueprint's parent.
"""

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from .blueprint import create, pop_section
from .dispatch import invoke
from .exceptions import ConfigurationError
from .settings import get_config
from .substrate import ProtoObject, find_owner, get_prototype, is_object_like, iter_chain
from .types import (
    BLUEPRINT_OPERATIONS,
    INIT,
    LEGACY_INIT,
    MIX_IN,
    Blueprint,
    is_method,
    private_methods_of,
    statics_of,
)

logger = logging.getLogger(__name__)

_EXCLUDED_MEMBERS = BLUEPRINT_OPERATIONS | {INIT, LEGACY_INIT, MIX_IN}


class InitializerChain:
    """Ordered initializers run with identical arguments, none short-circuiting."""

    def __init__(self, initializers: list[Callable]):
        self.initializers = tuple(initializers)

    def __call__(self, receiver: Any, *args, **kwargs) -> None:
        for initializer in self.initializers:
            initializer(receiver, *args, **kwargs)

    def __iter__(self) -> Iterator[Callable]:
        return iter(self.initializers)

    def __len__(self) -> int:
        return len(self.initializers)

    def __repr__(self) -> str:
        return f"<InitializerChain of {len(self.initializers)}>"


class AnchoredMethod:
    """Method lifted out of a blueprint chain, still dispatched at its own level.

    ``call_super`` inside the method keeps climbing the source chain it was
    defined on, not the composed blueprint's.
    """

    __slots__ = ("__wrapped__", "level")

    def __init__(self, method: Callable, level: ProtoObject):
        self.__wrapped__ = method
        self.level = level

    def __call__(self, receiver: Any, *args, **kwargs) -> Any:
        return invoke(receiver, self.level, self.__wrapped__, args, kwargs)

    def __repr__(self) -> str:
        name = getattr(self.__wrapped__, "__name__", type(self.__wrapped__).__name__)
        return f"<AnchoredMethod {name} level={self.level!r}>"


def _anchor(member: Any, level: ProtoObject) -> Any:
    # Root-level members have no chain to climb
    if is_method(member) and get_prototype(level) is not None:
        return AnchoredMethod(member, level)
    return member


def _flatten_blueprint(source: ProtoObject) -> tuple[dict, dict, dict, Any]:
    """Collapse a blueprint chain into (public, private, statics, init)."""
    public: dict[str, Any] = {}
    private: dict[str, Any] = {}
    statics: dict[str, Any] = {}
    for level in reversed(list(iter_chain(source))):
        level_statics = statics_of(level)
        for name, member in level.__dict__.items():
            if name in level_statics:
                statics[name] = member
            elif name not in _EXCLUDED_MEMBERS:
                public[name] = _anchor(member, level)
        for name, member in private_methods_of(level).items():
            private[name] = _anchor(member, level)

    init_level = find_owner(source, INIT)
    init = _anchor(init_level.__dict__[INIT], init_level) if init_level is not None else None
    return public, private, statics, init


def _split_bag(source: Mapping[str, Any]) -> tuple[dict, dict, dict, Any]:
    config = get_config()
    public = dict(source)
    private = pop_section(public, config.private_key)
    statics = pop_section(public, config.statics_key)
    return public, private, statics, public.get(INIT)


def compose(*sources: Blueprint | Mapping[str, Any], **options) -> Blueprint:
    """Compose several blueprints (or property bags) into one blueprint.

    Args:
        *sources: Two or more blueprints or property bags, merged in order
        **options: Forwarded to ``create`` (``super_proto``, ``allow_mixins``)

    Returns:
        Blueprint whose ``init`` runs every source's initializer in order

    Raises:
        ConfigurationError: If fewer than two sources are given or a source
            is neither a blueprint nor a mapping
    """
    if len(sources) < 2:
        raise ConfigurationError(
            f"compose() needs at least two blueprints, got {len(sources)}"
        )

    members: dict[str, Any] = {}
    private: dict[str, Any] = {}
    statics: dict[str, Any] = {}
    initializers: list[Callable] = []

    for position, source in enumerate(sources):
        if isinstance(source, Mapping):
            public, source_private, source_statics, init = _split_bag(source)
        elif is_object_like(source):
            public, source_private, source_statics, init = _flatten_blueprint(source)
        else:
            raise ConfigurationError(
                "Given prototype is not an object.",
                details=[f"Argument {position} is {type(source).__name__}"],
            )

        for name, member in public.items():
            if name not in _EXCLUDED_MEMBERS:
                members[name] = member
        private.update(source_private)
        statics.update(source_statics)
        if is_method(init):
            initializers.append(init)

    logger.debug(
        "Composed %d sources: %d public, %d private, %d initializers",
        len(sources), len(members), len(private), len(initializers),
    )

    config = get_config()
    members[config.private_key] = private
    members[config.statics_key] = statics
    if initializers:
        members[INIT] = InitializerChain(initializers)
    return create(members, **options)
