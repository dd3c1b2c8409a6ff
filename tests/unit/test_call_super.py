# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Unit tests for super dispatch."""

from unittest.mock import Mock

import pytest

from protomatter import MethodNotFoundError, create
from protomatter.dispatch import resolve_super


class TestCallSuper:
    """Test call_super from method bodies and from outside."""

    @pytest.fixture
    def super_method(self):
        return Mock(return_value="return value")

    @pytest.fixture
    def instance(self, super_method):
        super_proto = create({"super_method": super_method})
        proto = super_proto.extend({
            "proto_method": lambda ctx: ctx.call_super("super_method", "an argument"),
        })
        return proto.instantiate()

    def test_calls_method_in_super_prototype(self, instance, super_method):
        instance.proto_method()

        super_method.assert_called_once()

    def test_passes_arguments(self, instance, super_method):
        instance.proto_method()

        assert super_method.call_args.args[1:] == ("an argument",)

    def test_returns_super_return_value(self, instance):
        assert instance.proto_method() == "return value"

    def test_missing_method_raises(self, instance):
        with pytest.raises(MethodNotFoundError, match="missing_method") as excinfo:
            instance.call_super("missing_method")

        assert excinfo.value.method_name == "missing_method"

    def test_external_call(self, instance, super_method):
        assert instance.call_super("super_method") == "return value"
        super_method.assert_called_once()

    def test_root_method_calling_super_raises(self):
        proto = create({"method": lambda ctx: ctx.call_super("method")})

        with pytest.raises(MethodNotFoundError):
            proto.instantiate().method()


class TestMultiLevel:
    """Nested super calls climb the chain one level at a time."""

    def test_init_through_several_levels(self):
        calls = []

        def base_init(ctx):
            calls.append("base")

        def middle_init(ctx):
            ctx.call_super("init")
            calls.append("middle")

        proto = create({"init": base_init})
        proto3 = proto.extend({"init": middle_init}).extend({})
        proto3.instantiate()

        assert calls == ["base", "middle"]

    def test_calls_method_in_appropriate_next_level(self):
        top_method = Mock()
        proto = create({"top_method": top_method})
        proto2 = proto.extend({
            "middle_method": lambda ctx: ctx.call_super("top_method"),
            "top_method": lambda ctx: pytest.fail("resolved to the wrong level"),
        })
        proto4 = proto2.extend({}).extend({
            "bottom_method": lambda ctx: ctx.call_super("middle_method"),
        })
        proto4.instantiate().bottom_method()

        top_method.assert_called_once()

    def test_each_level_runs_once_bottom_to_top(self):
        order = []

        def level(name, calls_super=True):
            def method(ctx):
                order.append(name)
                if calls_super:
                    ctx.call_super("step")
            return method

        base = create({"step": level("base", calls_super=False)})
        bottom = base.extend({"step": level("one")}).extend({"step": level("two")}).extend({"step": level("three")})
        bottom.instantiate().step()

        assert order == ["three", "two", "one", "base"]

    def test_dispatcher_restored_after_call(self):
        base = create({"greet": lambda ctx: "base"})
        child = base.extend({"greet": lambda ctx: ctx.call_super("greet") + "-child"})
        instance = child.instantiate()

        assert instance.greet() == "base-child"
        assert instance.call_super("greet") == "base"

    def test_dispatcher_restored_after_failure(self):
        def explode(ctx):
            raise RuntimeError("boom")

        base = create({"greet": lambda ctx: "base", "explode": explode})
        child = base.extend({"explode": lambda ctx: ctx.call_super("explode")})
        instance = child.instantiate()

        with pytest.raises(RuntimeError):
            instance.explode()
        assert instance.call_super("greet") == "base"

    def test_private_method_can_call_super(self):
        base = create({"private": {"save": lambda ctx: "saved"}})
        child = base.extend({
            "private": {"save": lambda ctx: "child-" + ctx.call_super("save")},
            "store": lambda ctx: ctx.save(),
        })

        assert child.instantiate().store() == "child-saved"


class TestResolveSuper:
    def test_skips_levels_that_only_inherit(self):
        base = create({"method": lambda ctx: None})
        middle = base.extend({})
        leaf = middle.extend({})

        owner, _ = resolve_super(leaf, "method")

        assert owner is base

    def test_ignores_blueprint_operations(self):
        leaf = create({}).extend({})

        with pytest.raises(MethodNotFoundError):
            resolve_super(leaf, "instantiate")
