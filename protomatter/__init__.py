# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Protomatter: class-like encapsulation for delegation-based objects.

Blueprints are delegation nodes. Instances delegate to their blueprint and
run every method against a hidden per-instance private context, which holds
instance state and private methods.

Example:
    >>> from protomatter import create
    >>> Counter = create({
    ...     "init": lambda ctx: setattr(ctx, "count", 0),
    ...     "increment": lambda ctx: setattr(ctx, "count", ctx.count + 1),
    ...     "get_count": lambda ctx: ctx.count,
    ... })
    >>> counter = Counter.instantiate()
    >>> counter.increment()
    >>> counter.get_count()
    1
    >>> hasattr(counter, "count")
    False

Entry points:
    create    Build a blueprint from a property bag
    compose   Merge several blueprints, chaining their initializers
    convert   Adapt a Python class into a blueprint
"""

from .blueprint import create
from .compose import InitializerChain, compose
from .context import BoundMethod, PublicMethod
from .convert import convert
from .exceptions import (
    ConfigurationError,
    MethodNotFoundError,
    MixinsDisabledError,
    ProtomatterError,
)
from .substrate import ProtoObject, create_object, get_prototype
from .types import Blueprint, Instance

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "create",
    "compose",
    "convert",
    # Node types
    "ProtoObject",
    "Blueprint",
    "Instance",
    "PublicMethod",
    "BoundMethod",
    "InitializerChain",
    # Substrate helpers
    "create_object",
    "get_prototype",
    # Errors
    "ProtomatterError",
    "ConfigurationError",
    "MethodNotFoundError",
    "MixinsDisabledError",
]
