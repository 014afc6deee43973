import streamlit as st

from undo_core.config import PAGE_CONFIG, STATE_KEY
from undo_core.counter import counter_state
from undo_core.download import history_to_df, to_excel_buffer
from undo_core.logging import init_logs, get_logs_df, clear_logs
from undo_core.store import create_store
from undo_core.undo_redo import with_history


# ------------------------------------------------------------
# НАСТРОЙКА СТРАНИЦЫ
# ------------------------------------------------------------
st.set_page_config(**PAGE_CONFIG)

st.title("Счётчик — Undo / Redo на патчах")


# ------------------------------------------------------------
# ГЛУБИНА ИСТОРИИ (Sidebar)
# ------------------------------------------------------------
with st.sidebar:
    st.subheader("История")
    limit_history = st.checkbox("Ограничить глубину истории", value=False)
    max_depth = None
    if limit_history:
        max_depth = int(st.number_input("Максимум шагов", min_value=1, value=20, step=1))

    if st.button("Сбросить состояние и историю"):
        st.session_state.pop(STATE_KEY, None)
        clear_logs(st.session_state)


# ------------------------------------------------------------
# ИНИЦИАЛИЗАЦИЯ СОСТОЯНИЯ
# ------------------------------------------------------------
init_logs(st.session_state)

# при перезапуске скрипта состояние уже лежит в session_state
store = create_store(
    with_history(counter_state, max_depth=max_depth, journal=st.session_state),
    storage=st.session_state,
    key=STATE_KEY,
)

# действия пересобираются на каждом запуске, чтобы учесть текущую глубину истории
store.set_state({k: v for k, v in store.get_initial_state().items() if callable(v)})

state = store.get_state()


# ------------------------------------------------------------
# ДЕЙСТВИЯ СО СЧЁТЧИКОМ
# ------------------------------------------------------------
st.header("Действия")

col_inc, col_dec = st.columns(2)
if col_inc.button("➕ Увеличить"):
    state["increment"]()
if col_dec.button("➖ Уменьшить"):
    state["decrement"]()

st.markdown("Без истории:")
col_inc_nh, col_dec_nh, col_reset = st.columns(3)
if col_inc_nh.button("➕ без истории"):
    state["increment_without_history"]()
if col_dec_nh.button("➖ без истории"):
    state["decrement_without_history"]()
if col_reset.button("Сбросить в 0"):
    state["reset_without_history"]()


# ------------------------------------------------------------
# UNDO / REDO КНОПКИ
# ------------------------------------------------------------
col_undo, col_redo = st.columns(2)
if col_undo.button("↩ Отменить", disabled=not state["can_undo"]):
    if not state["undo"]():
        st.warning("Нет действий для отмены.")

if col_redo.button("↪ Повторить", disabled=not state["can_redo"]):
    if not state["redo"]():
        st.warning("Нет действий для повтора.")

state = store.get_state()


# ------------------------------------------------------------
# ТЕКУЩЕЕ СОСТОЯНИЕ
# ------------------------------------------------------------
st.metric("count", state["count"])
st.write(f"can_undo: **{state['can_undo']}**, can_redo: **{state['can_redo']}**")


# ------------------------------------------------------------
# ИСТОРИЯ И ЖУРНАЛ
# ------------------------------------------------------------
st.header("Стеки истории")
df_history = history_to_df(state)
st.dataframe(df_history, use_container_width=True)

st.header("Журнал действий")
df_logs = get_logs_df(st.session_state)
st.dataframe(df_logs, use_container_width=True)

st.download_button(
    "⬇ Скачать history.xlsx",
    data=to_excel_buffer({"history": df_history, "log_actions": df_logs}),
    file_name="history.xlsx",
    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)
