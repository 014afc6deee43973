"""
Journal and Export Tests
"""

import threading

import pandas as pd

from undo_core.config import LOGS_KEY
from undo_core.counter import counter_state
from undo_core.download import history_to_df, to_excel_buffer
from undo_core.logging import init_logs, log_action, get_logs_df, clear_logs
from undo_core.store import create_store
from undo_core.undo_redo import with_history


def counter_with_journal(**kwargs):
    journal = {}
    store = create_store(with_history(counter_state, journal=journal, **kwargs))
    return store, journal


# =============================================================================
# JOURNAL
# =============================================================================

class TestJournal:

    def test_init_is_idempotent(self):
        session_state = {LOGS_KEY: [{"action": "old"}]}
        init_logs(session_state)
        assert session_state[LOGS_KEY] == [{"action": "old"}]

    def test_extra_fields_are_copied(self):
        session_state = {}
        extra = {"tags": ["a"]}
        log_action(session_state, "custom", extra=extra)
        extra["tags"].append("b")

        assert session_state[LOGS_KEY][0]["tags"] == ["a"]
        assert session_state[LOGS_KEY][0]["action"] == "custom"

    def test_writer_journals_each_operation(self):
        store, journal = counter_with_journal()
        actions = store.get_state()

        actions["increment"]()
        actions["increment"]()
        actions["reset_without_history"]()
        actions["undo"]()
        actions["redo"]()
        actions["redo"]()  # empty stack: not journaled

        df = get_logs_df(journal)
        assert list(df["action"]) == ["mutate", "mutate", "replace", "undo", "redo"]
        assert list(df["undo_depth"].iloc[[0, 1, 3, 4]]) == [1, 2, 1, 2]
        assert df.iloc[2]["keys"] == "count"

    def test_eviction_is_journaled(self):
        store, journal = counter_with_journal(max_depth=1)
        store.get_state()["increment"]()
        store.get_state()["increment"]()

        df = get_logs_df(journal)
        assert df.iloc[-1]["evicted"] == 1

    def test_concurrent_writers_journal_in_commit_order(self):
        store, journal = counter_with_journal()
        increment = store.get_state()["increment"]

        def worker():
            for _ in range(50):
                increment()

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        df = get_logs_df(journal)
        assert list(df["undo_depth"]) == list(range(1, 201))

    def test_clear_logs(self):
        store, journal = counter_with_journal()
        store.get_state()["increment"]()
        clear_logs(journal)
        assert get_logs_df(journal).empty


# =============================================================================
# EXPORT
# =============================================================================

class TestExport:

    def test_history_to_df(self):
        store, _ = counter_with_journal()
        actions = store.get_state()
        actions["increment"]()
        actions["increment"]()
        actions["undo"]()

        df = history_to_df(store.get_state())
        assert list(df["stack"]) == ["undo", "redo"]
        assert '"path": "/count"' in df.iloc[0]["forward"]

    def test_empty_history_has_columns(self):
        store, _ = counter_with_journal()
        df = history_to_df(store.get_state())
        assert df.empty
        assert list(df.columns) == ["stack", "position", "forward", "inverse"]

    def test_excel_roundtrip(self):
        store, journal = counter_with_journal()
        store.get_state()["increment"]()

        buffer = to_excel_buffer({
            "history": history_to_df(store.get_state()),
            "log_actions": get_logs_df(journal),
        })
        sheets = pd.read_excel(buffer, sheet_name=None)

        assert set(sheets) == {"history", "log_actions"}
        assert list(sheets["log_actions"]["action"]) == ["mutate"]
