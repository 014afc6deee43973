# undo_core/patches.py
from collections.abc import Mapping
from typing import Any, Callable, Dict, Tuple

import jsonpatch
from jsonpointer import JsonPointerException

from undo_core.errors import DeltaComputationError, DeltaApplicationError
from undo_core.utils import clone_state


# ============================================================
#  ПОСТРОЕНИЕ ПАТЧЕЙ
# ============================================================
def produce_with_patches(
    state: Dict[str, Any],
    recipe: Callable[[Dict[str, Any]], None],
) -> Tuple[Dict[str, Any], jsonpatch.JsonPatch, jsonpatch.JsonPatch]:
    """
    Применяет recipe к копии состояния (черновику).
    Возвращает:
      - новое состояние
      - прямой патч (state → next_state)
      - обратный патч (next_state → state)

    Исходное состояние не изменяется.
    Ошибки самого recipe пробрасываются как есть.
    """

    draft = clone_state(state)
    result = recipe(draft)

    if result is None:
        next_state = draft
    elif isinstance(result, Mapping):
        # recipe вернул новое значение вместо мутации черновика
        next_state = dict(result)
    else:
        raise DeltaComputationError(
            f"recipe вернул {type(result).__name__}, ожидалось None или mapping"
        )

    try:
        patches = jsonpatch.make_patch(state, next_state)
        inverse_patches = jsonpatch.make_patch(next_state, state)
    except (jsonpatch.JsonPatchException, JsonPointerException, TypeError, ValueError) as exc:
        raise DeltaComputationError(f"не удалось построить патч: {exc}") from exc

    return next_state, patches, inverse_patches


# ============================================================
#  ПРИМЕНЕНИЕ ПАТЧЕЙ
# ============================================================
def apply_patches(state: Dict[str, Any], patches: jsonpatch.JsonPatch) -> Dict[str, Any]:
    """
    Применяет патч к копии состояния и возвращает результат.
    Если патч не подходит к текущей форме состояния — DeltaApplicationError.
    """

    try:
        return patches.apply(state, in_place=False)
    except (jsonpatch.JsonPatchException, JsonPointerException) as exc:
        raise DeltaApplicationError(f"не удалось применить патч: {exc}") from exc


def patch_size(patches: jsonpatch.JsonPatch) -> int:
    """Количество операций в патче (для журнала)."""
    return len(patches.patch)
