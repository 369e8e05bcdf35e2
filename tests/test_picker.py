"""Tests for aliasx.tui.picker: filtering and key handling without a terminal."""

from __future__ import annotations

import pytest

from aliasx.config import Scope
from aliasx.tasks.model import TaskEntry
from aliasx.tui import keys
from aliasx.tui.keys import Key
from aliasx.tui.picker import (
    PickerAction,
    PickerState,
    filter_labels,
    filter_tasks,
    in_scope,
    visible_window,
)


# ── Filtering ───────────────────────────────────────────────────────


class TestFilterLabels:
    def test_empty_query_matches_all_in_order(self):
        assert filter_labels(["b", "a", "c"], "") == [(0, "b"), (1, "a"), (2, "c")]

    def test_case_insensitive_substring_anywhere(self):
        candidates = ["Deploy prod", "build", "REDEPLOY"]
        assert filter_labels(candidates, "depl") == [(0, "Deploy prod"), (2, "REDEPLOY")]

    def test_never_reorders(self):
        candidates = ["xa", "a", "ya"]
        assert [pos for pos, _ in filter_labels(candidates, "a")] == [0, 1, 2]

    def test_no_match(self):
        assert filter_labels(["a"], "zzz") == []


class TestFilterTasks:
    def _tasks(self):
        return [
            (0, Scope.LOCAL, TaskEntry("build", "make")),
            (1, Scope.GLOBAL, TaskEntry("Build docs", "mkdocs build")),
            (3, Scope.ALL, TaskEntry("ll", "ls -l")),
        ]

    def test_all_scope(self):
        assert [i for i, _ in filter_tasks(self._tasks(), "", Scope.ALL)] == [0, 1, 3]

    def test_local_scope(self):
        assert [i for i, _ in filter_tasks(self._tasks(), "", Scope.LOCAL)] == [0]

    def test_global_scope(self):
        assert [i for i, _ in filter_tasks(self._tasks(), "", Scope.GLOBAL)] == [1]

    def test_scope_then_query(self):
        assert [i for i, _ in filter_tasks(self._tasks(), "BUILD", Scope.GLOBAL)] == [1]

    def test_query_matches_label_not_command(self):
        assert filter_tasks(self._tasks(), "mkdocs", Scope.ALL) == []

    def test_source_serving_both_shows_only_under_all(self):
        assert in_scope(Scope.ALL, Scope.ALL)
        assert not in_scope(Scope.ALL, Scope.LOCAL)
        assert not in_scope(Scope.ALL, Scope.GLOBAL)


# ── State transitions ───────────────────────────────────────────────


class TestPickerState:
    def test_char_appends_and_resets_selection(self):
        state = PickerState(query="de", selected=3)
        assert state.apply(Key.of("p"), 5) is PickerAction.CONTINUE
        assert state.query == "dep"
        assert state.selected == 0

    def test_backspace(self):
        state = PickerState(query="dep", selected=2)
        state.apply(keys.BACKSPACE, 5)
        assert state.query == "de"
        assert state.selected == 0

    def test_backspace_on_empty_query(self):
        state = PickerState()
        state.apply(keys.BACKSPACE, 5)
        assert state.query == ""

    def test_up_down_clamped(self):
        state = PickerState()
        state.apply(keys.UP, 3)
        assert state.selected == 0
        for _ in range(5):
            state.apply(keys.DOWN, 3)
        assert state.selected == 2
        state.apply(keys.UP, 3)
        assert state.selected == 1

    def test_enter_accepts_only_with_candidates(self):
        assert PickerState().apply(keys.ENTER, 0) is PickerAction.CONTINUE
        assert PickerState().apply(keys.ENTER, 1) is PickerAction.ACCEPT

    def test_escape_aborts(self):
        assert PickerState().apply(keys.ESCAPE, 3) is PickerAction.ABORT

    def test_other_keys_ignored(self):
        state = PickerState(query="x", selected=1)
        assert state.apply(keys.OTHER, 3) is PickerAction.CONTINUE
        assert (state.query, state.selected) == ("x", 1)

    def test_tab_ignored_in_string_mode(self):
        state = PickerState()
        state.apply(keys.TAB, 3)
        assert state.scope is Scope.ALL

    def test_question_mark_is_text_in_string_mode(self):
        state = PickerState()
        state.apply(Key.of("?"), 3)
        assert state.query == "?"
        assert state.show_details is False

    def test_tab_cycles_scope_forward(self):
        state = PickerState(selected=2)
        seen = []
        for _ in range(3):
            state.apply(keys.TAB, 5, task_mode=True)
            seen.append(state.scope)
        assert seen == [Scope.LOCAL, Scope.GLOBAL, Scope.ALL]
        assert state.selected == 0

    def test_backtab_cycles_scope_backward(self):
        state = PickerState()
        seen = []
        for _ in range(3):
            state.apply(keys.BACKTAB, 5, task_mode=True)
            seen.append(state.scope)
        assert seen == [Scope.GLOBAL, Scope.LOCAL, Scope.ALL]

    def test_question_mark_toggles_details_in_task_mode(self):
        state = PickerState()
        state.apply(Key.of("?"), 5, task_mode=True)
        assert state.show_details is True
        assert state.query == ""
        state.apply(Key.of("?"), 5, task_mode=True)
        assert state.show_details is False

    @pytest.mark.parametrize(("selected", "count", "expected"), [(5, 3, 2), (1, 3, 1), (4, 0, None)])
    def test_clamp(self, selected, count, expected):
        state = PickerState(selected=selected)
        assert state.clamp(count) == expected


# ── Scrolling window ────────────────────────────────────────────────


class TestVisibleWindow:
    def test_everything_fits(self):
        assert visible_window(3, 2, 10) == (0, 3)

    def test_selected_kept_visible(self):
        start, end = visible_window(100, 50, 10)
        assert start <= 50 < end
        assert end - start == 10

    def test_window_at_end(self):
        assert visible_window(20, 19, 5) == (15, 20)

    def test_no_room(self):
        assert visible_window(5, 0, 0) == (0, 0)
