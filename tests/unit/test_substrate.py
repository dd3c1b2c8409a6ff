# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Unit tests for the delegation substrate."""

import pytest

from protomatter.substrate import (
    ProtoObject,
    create_object,
    find_owner,
    get_prototype,
    has_own,
    hide,
    is_prototype_of,
    iter_chain,
    lookup,
    own_keys,
    set_prototype,
)


class TestDelegation:
    """Attribute lookup walks the parent chain."""

    def test_reads_delegate_to_parent(self):
        base = create_object(None, {"greeting": "hello"})
        child = create_object(base)

        assert child.greeting == "hello"
        assert get_prototype(child) is base

    def test_own_value_shadows_parent(self):
        base = create_object(None, {"greeting": "hello"})
        child = create_object(base, {"greeting": "hi"})

        assert child.greeting == "hi"
        assert base.greeting == "hello"

    def test_missing_name_raises_attribute_error(self):
        child = create_object(create_object())

        with pytest.raises(AttributeError):
            child.missing
        assert not hasattr(child, "missing")

    def test_writes_stay_on_the_node(self):
        base = create_object(None, {"value": 1})
        child = create_object(base)
        child.value = 2

        assert base.value == 1
        assert own_keys(child) == ["value"]

    def test_functions_are_not_bound(self):
        def method(receiver):
            return receiver

        child = create_object(create_object(None, {"method": method}))

        assert child.method is method

    def test_rejects_non_object_prototype(self):
        with pytest.raises(TypeError):
            create_object("darkside")


class TestHiddenNames:
    """Hidden names stop lookup at the hiding node."""

    def test_hidden_name_masks_ancestor(self):
        base = create_object(None, {"secret": 42})
        child = create_object(base)
        hide(child, "secret")

        assert not hasattr(child, "secret")
        assert find_owner(child, "secret") is None
        assert lookup(child, "secret", None) is None

    def test_hidden_name_masks_for_descendants(self):
        base = create_object(None, {"secret": 42})
        middle = create_object(base)
        hide(middle, "secret")
        leaf = create_object(middle)

        assert not hasattr(leaf, "secret")

    def test_own_assignment_wins_over_hidden(self):
        node = create_object(create_object(None, {"secret": 42}))
        hide(node, "secret")
        node.secret = "visible"

        assert node.secret == "visible"


class TestReflection:
    def test_iter_chain_nearest_first(self):
        root = create_object()
        middle = create_object(root)
        leaf = create_object(middle)

        assert list(iter_chain(leaf)) == [leaf, middle, root]

    def test_has_own_ignores_inherited(self):
        base = create_object(None, {"a": 1})
        child = create_object(base, {"b": 2})

        assert has_own(child, "b")
        assert not has_own(child, "a")
        assert find_owner(child, "a") is base

    def test_lookup_without_default_raises(self):
        with pytest.raises(AttributeError):
            lookup(create_object(), "missing")

    def test_is_prototype_of(self):
        root = create_object()
        leaf = create_object(create_object(root))

        assert is_prototype_of(root, leaf)
        assert not is_prototype_of(leaf, root)
        assert not is_prototype_of(leaf, leaf)
        assert not is_prototype_of(root, object())

    def test_set_prototype_reparents(self):
        first = create_object(None, {"name": "first"})
        second = create_object(None, {"name": "second"})
        node = create_object(first)
        set_prototype(node, second)

        assert node.name == "second"

    def test_set_prototype_refuses_cycles(self):
        root = create_object()
        leaf = create_object(root)

        with pytest.raises(ValueError):
            set_prototype(root, leaf)
        with pytest.raises(ValueError):
            set_prototype(root, root)

    def test_repr_lists_own_keys(self):
        assert repr(ProtoObject(None, {"b": 1, "a": 2})) == "<ProtoObject keys=['a', 'b']>"
