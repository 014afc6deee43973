# undo_core/utils.py
from copy import deepcopy
from datetime import datetime


# ============================================================
# 🌟 СЛУЖЕБНЫЕ КЛЮЧИ ИСТОРИИ
# ============================================================
UNDO_HISTORY_KEY = "_undo_history"
REDO_HISTORY_KEY = "_redo_history"
CAN_UNDO_KEY = "can_undo"
CAN_REDO_KEY = "can_redo"
UNDO_KEY = "undo"
REDO_KEY = "redo"

HISTORY_KEYS = frozenset({
    UNDO_HISTORY_KEY,
    REDO_HISTORY_KEY,
    CAN_UNDO_KEY,
    CAN_REDO_KEY,
    UNDO_KEY,
    REDO_KEY,
})


# ============================================================
# 🌟 TIMESTAMP
# ============================================================
def now_ts():
    """Возвращает timestamp в удобном формате."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


# ============================================================
# 🌟 ГЛУБОКОЕ КЛОНИРОВАНИЕ СОСТОЯНИЯ
# ============================================================
def clone_state(state):
    """Делает глубокую копию данных состояния (черновик для мутаций)."""
    return deepcopy(state)


# ============================================================
# 🌟 ДАННЫЕ / СЛУЖЕБНАЯ ЧАСТЬ
# ============================================================
def is_bookkeeping(key, value) -> bool:
    """Служебное поле: ключи истории и функции-действия."""
    return key in HISTORY_KEYS or callable(value)


def split_state(state):
    """
    Делит состояние на две части:
      - data — доменные данные (то, что диффается и откатывается)
      - meta — ключи истории и действия (никогда не диффаются)
    """
    data = {}
    meta = {}
    for key, value in state.items():
        if is_bookkeeping(key, value):
            meta[key] = value
        else:
            data[key] = value
    return data, meta


def strip_history_keys(partial):
    """Убирает ключи истории из частичного обновления."""
    return {k: v for k, v in partial.items() if k not in HISTORY_KEYS}
