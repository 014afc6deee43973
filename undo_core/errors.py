# undo_core/errors.py


class HistoryError(Exception):
    """Базовая ошибка истории изменений."""


class DeltaComputationError(HistoryError):
    """Не удалось построить патчи для изменения (write/mutate)."""


class DeltaApplicationError(HistoryError):
    """Сохранённый патч больше не применяется к состоянию (undo/redo)."""
