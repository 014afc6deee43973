# undo_core/undo_redo.py
from collections.abc import Mapping
from types import MappingProxyType
from typing import NamedTuple

import jsonpatch

from undo_core.classifier import is_mutator
from undo_core.config import DEFAULT_MAX_DEPTH, validate_max_depth
from undo_core.logging import (
    init_logs,
    log_mutate,
    log_replace,
    log_undo,
    log_redo,
    log_error,
)
from undo_core.patches import produce_with_patches, apply_patches, patch_size
from undo_core.utils import (
    UNDO_HISTORY_KEY,
    REDO_HISTORY_KEY,
    CAN_UNDO_KEY,
    CAN_REDO_KEY,
    UNDO_KEY,
    REDO_KEY,
    split_state,
    strip_history_keys,
)


class HistoryEntry(NamedTuple):
    """Одно записанное изменение: прямой и обратный патч."""

    patches: jsonpatch.JsonPatch
    inverse_patches: jsonpatch.JsonPatch


# ============================================================
# 🧩 ЗАПИСЬ С ИСТОРИЕЙ
# ============================================================

class HistoryWriter:
    """
    Обёртка над set_state хранилища.

    Мутации черновика записываются в историю как пара патчей,
    замены состояния применяются напрямую без истории.
    Стеки undo/redo хранятся в самом состоянии (кортежи HistoryEntry),
    поэтому каждая операция — ровно один переход хранилища.
    """

    def __init__(self, set_state, max_depth=DEFAULT_MAX_DEPTH, journal=None):
        self._set_state = set_state
        self.max_depth = validate_max_depth(max_depth)
        self.journal = journal if journal is not None else {}
        init_logs(self.journal)

    # --------------------------------------------------------
    # 📌 WRITE
    # --------------------------------------------------------

    def write(self, action, replace=False):
        """
        Универсальная запись: значение, функция-замена или мутация.
        Стиль функции определяется пробным вызовом (см. classifier).
        """
        if callable(action) and is_mutator(action):
            # replace не нужен: запись с историей всегда заменяет состояние целиком
            self.mutate(action)
        else:
            self.replace(action, replace)

    def mutate(self, recipe):
        """Мутация черновика: записывается в историю, redo очищается."""

        def commit(state):
            state = state or {}
            data, meta = split_state(state)
            next_data, patches, inverse_patches = produce_with_patches(data, recipe)

            undo_history = state.get(UNDO_HISTORY_KEY, ()) + (
                HistoryEntry(patches, inverse_patches),
            )
            evicted = 0
            if self.max_depth is not None and len(undo_history) > self.max_depth:
                evicted = len(undo_history) - self.max_depth
                undo_history = undo_history[evicted:]

            # журнал пишется под блокировкой хранилища, в порядке коммитов
            log_mutate(
                self.journal,
                operations=patch_size(patches),
                undo_depth=len(undo_history),
                evicted=evicted,
            )
            return {
                **meta,
                **next_data,
                UNDO_HISTORY_KEY: undo_history,
                REDO_HISTORY_KEY: (),
                CAN_UNDO_KEY: True,
                CAN_REDO_KEY: False,
            }

        self._commit("mutate", commit)

    def replace(self, action, replace=False):
        """
        Замена состояния (значение или функция от read-only состояния).
        История не меняется; ключи истории из partial игнорируются.
        """

        def commit(state):
            state = state or {}
            partial = action(MappingProxyType(state)) if callable(action) else action

            if partial is None:
                partial = {}
            if not isinstance(partial, Mapping):
                raise TypeError(
                    f"замена должна быть mapping, получено: {type(partial).__name__}"
                )

            partial = strip_history_keys(partial)
            log_replace(self.journal, list(partial), replace)

            if replace:
                # полная замена не удаляет историю и действия
                _, meta = split_state(state)
                return {**meta, **partial}
            return {**state, **partial}

        self._commit("replace", commit)

    # --------------------------------------------------------
    # 📌 UNDO / REDO
    # --------------------------------------------------------

    def undo(self) -> bool:
        """Откат последнего изменения. Пустой стек — ничего не делает."""
        outcome = {}

        def commit(state):
            undo_history = state.get(UNDO_HISTORY_KEY, ()) if state else ()
            if not undo_history:
                return state

            entry = undo_history[-1]
            data, meta = split_state(state)
            next_data = apply_patches(data, entry.inverse_patches)

            undo_history = undo_history[:-1]
            redo_history = state.get(REDO_HISTORY_KEY, ()) + (entry,)

            outcome.update(
                operations=patch_size(entry.inverse_patches),
                undo_depth=len(undo_history),
                redo_depth=len(redo_history),
            )
            log_undo(self.journal, **outcome)
            return {
                **meta,
                **next_data,
                UNDO_HISTORY_KEY: undo_history,
                REDO_HISTORY_KEY: redo_history,
                CAN_UNDO_KEY: len(undo_history) > 0,
                CAN_REDO_KEY: True,
            }

        self._commit("undo", commit)
        return bool(outcome)

    def redo(self) -> bool:
        """Повтор отменённого изменения. Пустой стек — ничего не делает."""
        outcome = {}

        def commit(state):
            redo_history = state.get(REDO_HISTORY_KEY, ()) if state else ()
            if not redo_history:
                return state

            entry = redo_history[-1]
            data, meta = split_state(state)
            next_data = apply_patches(data, entry.patches)

            redo_history = redo_history[:-1]
            undo_history = state.get(UNDO_HISTORY_KEY, ()) + (entry,)

            outcome.update(
                operations=patch_size(entry.patches),
                undo_depth=len(undo_history),
                redo_depth=len(redo_history),
            )
            log_redo(self.journal, **outcome)
            return {
                **meta,
                **next_data,
                UNDO_HISTORY_KEY: undo_history,
                REDO_HISTORY_KEY: redo_history,
                CAN_UNDO_KEY: True,
                CAN_REDO_KEY: len(redo_history) > 0,
            }

        self._commit("redo", commit)
        return bool(outcome)

    # --------------------------------------------------------

    def _commit(self, name, updater):
        # состояние собирается целиком, поэтому всегда replace=True
        try:
            self._set_state(updater, True)
        except Exception as exc:
            log_error(self.journal, name, exc)
            raise


# ============================================================
# 🧩 ДЕКОРАТОР ДЛЯ CREATOR
# ============================================================

class HistoryApi:
    """
    Хранилище глазами creator: set_state пишет через историю,
    остальное делегируется в исходный Store.
    """

    def __init__(self, store, writer):
        self._store = store
        self.writer = writer
        self.journal = writer.journal
        self.set_state = writer.write
        self.mutate = writer.mutate
        self.replace = writer.replace
        self.undo = writer.undo
        self.redo = writer.redo

    def __getattr__(self, name):
        return getattr(self._store, name)


def with_history(creator, max_depth=DEFAULT_MAX_DEPTH, journal=None):
    """
    Оборачивает creator(set_state, get_state, store) историей undo/redo.

    В состояние добавляются undo, redo, can_undo, can_redo
    и два стека истории (_undo_history, _redo_history).
    """

    def create(set_state, get_state, store):
        writer = HistoryWriter(set_state, max_depth=max_depth, journal=journal)
        api = HistoryApi(store, writer)

        state = dict(creator(writer.write, get_state, api))
        state.update({
            UNDO_KEY: writer.undo,
            REDO_KEY: writer.redo,
            CAN_UNDO_KEY: False,
            CAN_REDO_KEY: False,
            UNDO_HISTORY_KEY: (),
            REDO_HISTORY_KEY: (),
        })
        return state

    return create
