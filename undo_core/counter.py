# undo_core/counter.py


# ============================================================
# СЧЁТЧИК: МУТАЦИИ (С ИСТОРИЕЙ)
# ============================================================

def _increment(draft):
    draft["count"] += 1


def _decrement(draft):
    draft["count"] -= 1


# ============================================================
# 🧩 CREATOR
# ============================================================

def counter_state(set_state, get_state, store):
    """
    Состояние счётчика.

    increment / decrement — мутации черновика, попадают в историю.
    *_without_history — замены состояния, историю не трогают.
    """

    return {
        "count": 0,
        "increment": lambda: set_state(_increment),
        "decrement": lambda: set_state(_decrement),
        "reset_without_history": lambda: set_state({"count": 0}),
        "increment_without_history": lambda: set_state(
            lambda state: {"count": state["count"] + 1}
        ),
        "decrement_without_history": lambda: set_state(
            lambda state: {"count": state["count"] - 1}
        ),
    }
