# undo_core/store.py
import threading
from collections.abc import Mapping
from types import MappingProxyType

from undo_core.config import STATE_KEY


# ============================================================
# 🧩 ХРАНИЛИЩЕ СОСТОЯНИЯ
# ============================================================

class Store:
    """
    Контейнер состояния приложения.

    Состояние (dict) лежит в storage[key]. storage — любой MutableMapping,
    например st.session_state, чтобы состояние переживало перезапуски скрипта.
    Все записи идут через set_state под одной блокировкой.
    """

    def __init__(self, storage=None, key=STATE_KEY):
        self._storage = storage if storage is not None else {}
        self._key = key
        self._listeners = []
        self._initial_state = None
        self.lock = threading.RLock()

    def get_state(self):
        return self._storage.get(self._key)

    def get_initial_state(self):
        return self._initial_state

    def read_only(self):
        """Read-only view текущего состояния (верхний уровень)."""
        return MappingProxyType(self.get_state() or {})

    def set_state(self, partial, replace=False):
        """
        Применяет переход состояния.

        partial — mapping, None или функция (текущее состояние → mapping).
        Новое состояние полностью вычисляется до записи: если функция
        упала, состояние не меняется. Если функция вернула текущий объект
        состояния, перехода нет и подписчики не вызываются.
        """
        with self.lock:
            previous = self.get_state()
            next_state = partial(previous) if callable(partial) else partial

            if next_state is previous:
                return

            if next_state is None:
                next_state = {}

            if not isinstance(next_state, Mapping):
                raise TypeError(
                    f"состояние должно быть mapping, получено: {type(next_state).__name__}"
                )

            if replace or previous is None:
                next_state = dict(next_state)
            else:
                next_state = {**previous, **next_state}

            self._storage[self._key] = next_state
            listeners = list(self._listeners)

        for listener in listeners:
            listener(next_state, previous)

    def subscribe(self, listener):
        """Подписка на переходы. Возвращает функцию отписки."""
        with self.lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self.lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _init_state(self, state):
        self._initial_state = state
        if self._key not in self._storage:
            self._storage[self._key] = state


# ============================================================
# 📌 СОЗДАНИЕ ХРАНИЛИЩА
# ============================================================

def create_store(creator, storage=None, key=STATE_KEY):
    """
    Создаёт Store и инициализирует его состоянием от creator.

    creator(set_state, get_state, store) → dict начального состояния.
    Если в storage уже есть состояние под key (перезапуск страницы),
    оно сохраняется.
    """
    store = Store(storage=storage, key=key)
    state = creator(store.set_state, store.get_state, store)
    store._init_state(dict(state))
    return store
