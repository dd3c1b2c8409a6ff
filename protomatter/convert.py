# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Adapt a classic Python class into a blueprint.

The class namespace becomes the property bag:

- plain functions              -> public methods (``self`` is the receiver)
- ``_single_underscore`` funcs -> private methods
- staticmethod / classmethod   -> statics
- ``__init__``                 -> ``init``
- other non-dunder values      -> public data

Base classes other than ``object`` are converted too and become the parent
blueprint; several bases are composed into one parent. Zero-argument
``super()`` does not work inside converted methods because the receiver is a
private context, not an instance of the class. Use ``self.call_super`` instead.
"""

import logging
import weakref
from typing import Any

from .blueprint import create
from .compose import compose
from .exceptions import ConfigurationError
from .settings import get_config
from .types import INIT, Blueprint

logger = logging.getLogger(__name__)

# One blueprint per class for option-less conversions, so converted subclasses
# share their base blueprint
_converted: "weakref.WeakKeyDictionary[type, Blueprint]" = weakref.WeakKeyDictionary()


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _class_to_properties(cls: type) -> dict[str, Any]:
    config = get_config()
    public: dict[str, Any] = {}
    private: dict[str, Any] = {}
    statics: dict[str, Any] = {}

    for name, member in vars(cls).items():
        if name == "__init__":
            public[INIT] = member
        elif _is_dunder(name):
            continue
        elif isinstance(member, staticmethod):
            statics[name] = member.__func__
        elif isinstance(member, classmethod):
            statics[name] = member.__get__(None, cls)
        elif hasattr(member, "__get__") and not callable(member):
            logger.debug("Skipping descriptor %s.%s during conversion", cls.__name__, name)
        elif callable(member) and name.startswith("_"):
            private[name] = member
        else:
            public[name] = member

    if private:
        public[config.private_key] = private
    if statics:
        public[config.statics_key] = statics
    return public


def _convert_bases(cls: type) -> Blueprint | None:
    bases = [base for base in cls.__bases__ if base is not object]
    if not bases:
        return None
    parents = [convert(base) for base in bases]
    if len(parents) == 1:
        return parents[0]
    return compose(*parents)


def convert(cls: type, **options) -> Blueprint:
    """Convert ``cls`` into a blueprint.

    Without options the result is cached per class: converting a class twice,
    or converting two of its subclasses, reuses the same blueprint for it.

    Args:
        cls: Class to convert
        **options: Forwarded to ``create``; an explicit ``super_proto``
            replaces the converted base classes

    Raises:
        ConfigurationError: If ``cls`` is not a class
    """
    if not isinstance(cls, type):
        raise ConfigurationError(f"convert() expects a class, got {type(cls).__name__}")

    cacheable = not options
    if cacheable and cls in _converted:
        return _converted[cls]

    if "super_proto" not in options:
        options["super_proto"] = _convert_bases(cls)

    properties = _class_to_properties(cls)
    logger.debug("Converting class %s with %d members", cls.__qualname__, len(properties))
    blueprint = create(properties, **options)
    if cacheable:
        _converted[cls] = blueprint
    return blueprint
