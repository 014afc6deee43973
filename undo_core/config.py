# undo_core/config.py


# ============================================================
# КЛЮЧИ В SESSION_STATE
# ============================================================

STATE_KEY = "app_state"
LOGS_KEY = "log_actions"


# ============================================================
# ИСТОРИЯ
# ============================================================

# None — история без ограничения глубины
DEFAULT_MAX_DEPTH = None


def validate_max_depth(value):
    """
    Проверяет ограничение глубины истории.
    Допустимо: None или целое число >= 1.
    """
    if value is None:
        return None

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"max_depth должен быть целым числом, получено: {value!r}")

    if value < 1:
        raise ValueError(f"max_depth должен быть >= 1, получено: {value}")

    return value


# ============================================================
# НАСТРОЙКИ СТРАНИЦЫ (демо)
# ============================================================

PAGE_CONFIG = {
    "layout": "centered",
    "page_title": "Counter — Undo / Redo",
}
