# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""End-to-end scenarios across create, extend, compose and mix_in."""

import pytest

from protomatter import MethodNotFoundError, compose, create


def _increment(ctx):
    ctx.count += 1


@pytest.fixture
def counter():
    return create({
        "init": lambda ctx: setattr(ctx, "count", 0),
        "increment": _increment,
        "get_count": lambda ctx: ctx.count,
    })


def test_counter_keeps_state_private(counter):
    c = counter.instantiate()

    c.increment()
    c.increment()

    assert c.get_count() == 2
    assert not hasattr(c, "count")


def test_counters_do_not_share_state(counter):
    first = counter.instantiate()
    second = counter.instantiate()

    first.increment()

    assert first.get_count() == 1
    assert second.get_count() == 0


def test_super_chain_concatenates():
    base = create({"greet": lambda ctx: "base"})
    mid = base.extend({"greet": lambda ctx: ctx.call_super("greet") + "-mid"})
    top = mid.extend({"greet": lambda ctx: ctx.call_super("greet") + "-top"})

    assert top.instantiate().greet() == "base-mid-top"


def test_late_binding_reaches_existing_instances(counter):
    c = counter.instantiate()
    c.increment()

    counter.get_count = lambda ctx: ctx.count * 100

    assert c.get_count() == 100


def test_stack_with_history():
    stack = create({
        "init": lambda ctx: setattr(ctx, "items", []),
        "push": lambda ctx, item: ctx.items.append(item),
        "pop": lambda ctx: ctx.items.pop(),
        "size": lambda ctx: len(ctx.items),
    })

    def push_with_history(ctx, item):
        ctx.history.append(("push", item))
        ctx.call_super("push", item)

    def history_init(ctx):
        ctx.call_super("init")
        ctx.history = []

    audited = stack.extend({
        "init": history_init,
        "push": push_with_history,
        "get_history": lambda ctx: list(ctx.history),
    })
    s = audited.instantiate()
    s.push(1)
    s.push(2)

    assert s.pop() == 2
    assert s.size() == 1
    assert s.get_history() == [("push", 1), ("push", 2)]
    assert not hasattr(s, "items")


def test_composed_post_with_mixin():
    commentable = create({
        "init": lambda ctx: setattr(ctx, "comments", []),
        "comment": lambda ctx, text: ctx.comments.append(text),
    })
    likeable = create({
        "init": lambda ctx: setattr(ctx, "likes", 0),
        "like": lambda ctx: setattr(ctx, "likes", ctx.likes + 1),
    })
    post_blueprint = compose(commentable, likeable).extend({
        "stats": lambda ctx: (len(ctx.comments), ctx.likes),
    })

    post = post_blueprint.instantiate()
    post.comment("nice")
    post.like()
    post.mix_in({"reset_likes": lambda ctx: setattr(ctx, "likes", 0)})
    post.reset_likes()

    assert post.stats() == (1, 0)


def test_missing_super_method_is_reported():
    base = create({})
    child = base.extend({"run": lambda ctx: ctx.call_super("run")})

    with pytest.raises(MethodNotFoundError, match="Method run is not defined."):
        child.instantiate().run()
