import io
import pandas as pd

from undo_core.utils import UNDO_HISTORY_KEY, REDO_HISTORY_KEY


def history_to_df(state) -> pd.DataFrame:
    """
    Оба стека истории в виде таблицы:
    stack / position / forward / inverse (патчи в JSON).
    """

    rows = []
    for stack_name, key in (("undo", UNDO_HISTORY_KEY), ("redo", REDO_HISTORY_KEY)):
        for position, entry in enumerate(state.get(key, ())):
            rows.append({
                "stack": stack_name,
                "position": position,
                "forward": entry.patches.to_string(),
                "inverse": entry.inverse_patches.to_string(),
            })

    return pd.DataFrame(rows, columns=["stack", "position", "forward", "inverse"])


def to_excel_buffer(sheets: dict) -> io.BytesIO:
    """
    Пишет {sheet_name: DataFrame} в xlsx (openpyxl) и возвращает буфер.
    """

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for sheet_name, df in sheets.items():
            df.to_excel(writer, index=False, sheet_name=sheet_name)
    buffer.seek(0)
    return buffer
