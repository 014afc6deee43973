"""
Property Tests for the undo/redo timeline.

- Invertibility: N mutations followed by N undos restore the start state.
- Redo symmetry: undo then redo restores the state before the undo.
"""

from hypothesis import given, settings, strategies as st
from hypothesis.strategies import composite

from undo_core.store import create_store
from undo_core.undo_redo import with_history
from undo_core.utils import split_state


KEYS = ["a", "b", "c"]


# =============================================================================
# STRATEGIES
# =============================================================================

@composite
def mutation_ops(draw):
    """One structural mutation described as data."""
    kind = draw(st.sampled_from(["set", "delete", "append", "pop", "nest"]))
    key = draw(st.sampled_from(KEYS))
    value = draw(st.one_of(st.integers(-100, 100), st.text(max_size=5), st.none()))
    return kind, key, value


def build_recipe(op):
    kind, key, value = op

    def recipe(draft):
        if kind == "set":
            draft["scalars"][key] = value
        elif kind == "delete":
            draft["scalars"].pop(key, None)
        elif kind == "append":
            draft["items"].append(value)
        elif kind == "pop":
            if draft["items"]:
                draft["items"].pop(0)
        else:
            draft["nested"].setdefault(key, {})["value"] = value

    return recipe


def fresh_store():
    captured = {}

    def creator(set_state, get_state, api):
        captured["api"] = api
        return {"scalars": {"a": 0}, "items": [1, 2], "nested": {}}

    store = create_store(with_history(creator))
    return store, captured["api"]


def domain(store):
    data, _ = split_state(store.get_state())
    return data


# =============================================================================
# PROPERTIES
# =============================================================================

@settings(max_examples=50, deadline=None)
@given(st.lists(mutation_ops(), min_size=1, max_size=15))
def test_n_mutations_then_n_undos_restore_start(ops):
    store, api = fresh_store()
    start = domain(store)

    for op in ops:
        api.mutate(build_recipe(op))

    for _ in ops:
        assert api.undo() is True

    assert domain(store) == start
    assert store.get_state()["can_undo"] is False
    assert len(store.get_state()["_redo_history"]) == len(ops)


@settings(max_examples=50, deadline=None)
@given(
    st.lists(mutation_ops(), min_size=1, max_size=15),
    st.integers(min_value=1, max_value=15),
)
def test_undo_then_redo_is_symmetric(ops, undo_count):
    store, api = fresh_store()
    for op in ops:
        api.mutate(build_recipe(op))

    for _ in range(min(undo_count, len(ops))):
        before = domain(store)
        api.undo()
        api.redo()
        assert domain(store) == before
        api.undo()

    state = store.get_state()
    assert state["can_undo"] == (len(state["_undo_history"]) > 0)
    assert state["can_redo"] == (len(state["_redo_history"]) > 0)
