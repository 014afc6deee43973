import copy
import pandas as pd

from undo_core.config import LOGS_KEY
from undo_core.utils import now_ts


# ============================================================
# ИНИЦИАЛИЗАЦИЯ ЖУРНАЛА
# ============================================================

def init_logs(session_state):
    """
    Создаёт массив log_actions, если его нет.
    """
    if LOGS_KEY not in session_state:
        session_state[LOGS_KEY] = []


# ============================================================
# 🧾 ДОБАВИТЬ ЗАПИСЬ В ЖУРНАЛ
# ============================================================

def log_action(
    session_state,
    action: str,
    operations: int = None,
    undo_depth: int = None,
    redo_depth: int = None,
    extra: dict = None,
):
    """
    Универсальная функция журналирования.
    """
    init_logs(session_state)

    entry = {
        "date": now_ts(),
        "action": action,               # mutate, replace, undo, redo, error
        "operations": operations,       # число операций в патче
        "undo_depth": undo_depth,
        "redo_depth": redo_depth,
    }

    # кастомные поля
    if extra:
        entry.update(copy.deepcopy(extra))

    session_state[LOGS_KEY].append(entry)


# ============================================================
# ЖУРНАЛИРОВАНИЕ СПЕЦИФИЧЕСКИХ ТИПОВ
# ============================================================

def log_mutate(session_state, operations, undo_depth, evicted=0):
    log_action(
        session_state,
        action="mutate",
        operations=operations,
        undo_depth=undo_depth,
        redo_depth=0,
        extra={"evicted": evicted} if evicted else None,
    )


def log_replace(session_state, keys, replace=False):
    log_action(
        session_state,
        action="replace",
        extra={"keys": ", ".join(sorted(map(str, keys))), "full_replace": replace},
    )


def log_undo(session_state, operations, undo_depth, redo_depth):
    log_action(
        session_state,
        action="undo",
        operations=operations,
        undo_depth=undo_depth,
        redo_depth=redo_depth,
    )


def log_redo(session_state, operations, undo_depth, redo_depth):
    log_action(
        session_state,
        action="redo",
        operations=operations,
        undo_depth=undo_depth,
        redo_depth=redo_depth,
    )


def log_error(session_state, failed_action, error):
    log_action(
        session_state,
        action="error",
        extra={
            "failed_action": failed_action,
            "error": f"{type(error).__name__}: {error}",
        },
    )


# ============================================================
# ПОЛУЧИТЬ ЖУРНАЛ В ВИДЕ DATAFRAME
# ============================================================

def get_logs_df(session_state) -> pd.DataFrame:
    """
    Преобразует log_actions → DataFrame.
    """
    return pd.DataFrame(session_state.get(LOGS_KEY, []))


# ============================================================
# ОЧИСТИТЬ ЖУРНАЛ
# ============================================================

def clear_logs(session_state):
    session_state[LOGS_KEY] = []
