from __future__ import annotations

import unittest

from lazydb.action import (
    ChangeMode,
    Error,
    MakeSelection,
    NavDown,
    NavLeft,
    NavRight,
    NavUp,
    SelectCell,
    SelectRow,
    Yank,
)
from lazydb.app_event import QueryResult
from lazydb.components.results_table import ResultsTable, StructureTable
from lazydb.database.query import QueryTag, ResultSet, TableRef
from lazydb.layout import Rect
from lazydb.mode import Mode
from lazydb.render.frame import Frame

USERS = ResultSet(("id", "name"), (("1", "ada"), ("2", "grace")))


class ResultsTableTests(unittest.TestCase):
    def setUp(self) -> None:
        self.copied: list[str] = []
        self.table = ResultsTable(copy_to_clipboard=self._copy)
        self.table.update(ChangeMode(Mode.EXPLORE_RESULTS))
        self.table.handle_app_event(QueryResult(USERS, QueryTag.user()))

    def _copy(self, text: str) -> bool:
        self.copied.append(text)
        return True

    def test_only_user_visible_results_are_shown(self) -> None:
        self.table.handle_app_event(
            QueryResult(ResultSet(("s", "t"), (("public", "x"),)), QueryTag.list_tables())
        )
        self.assertEqual(self.table.result, USERS)
        initial = ResultSet(("a",), (("b",),))
        self.table.handle_app_event(QueryResult(initial, QueryTag.initial_table("users")))
        self.assertEqual(self.table.result, initial)

    def test_selection_without_column_emits_row(self) -> None:
        self.table.update(NavDown())
        self.assertEqual(self.table.update(MakeSelection()), SelectRow(("id", "name"), ("2", "grace")))

    def test_selection_with_column_emits_cell(self) -> None:
        self.table.update(NavRight())
        self.table.update(NavRight())
        self.assertEqual(self.table.update(MakeSelection()), SelectCell("ada"))
        self.table.update(NavLeft())
        self.assertEqual(self.table.update(MakeSelection()), SelectCell("1"))

    def test_navigation_clamps_and_requires_focus(self) -> None:
        self.table.update(NavUp())
        self.assertEqual(self.table.state.selected, 0)
        self.table.update(ChangeMode(Mode.EDIT_QUERY))
        self.table.update(NavDown())
        self.assertEqual(self.table.state.selected, 0)
        self.assertIsNone(self.table.update(MakeSelection()))

    def test_new_result_resets_selection(self) -> None:
        self.table.update(NavDown())
        self.table.update(NavRight())
        self.table.handle_app_event(QueryResult(USERS, QueryTag.user()))
        self.assertEqual((self.table.state.selected, self.table.state.column), (0, None))

    def test_yank_copies_cell_or_row(self) -> None:
        self.table.update(Yank())
        self.table.update(NavRight())
        self.table.update(Yank())
        self.assertEqual(self.copied, ["1 ada", "1"])

    def test_yank_failure_reports_error(self) -> None:
        self.table.copy_to_clipboard = lambda text: False
        self.assertIsInstance(self.table.update(Yank()), Error)

    def test_empty_result_has_nothing_to_select(self) -> None:
        self.table.handle_app_event(QueryResult(ResultSet(("id",), ()), QueryTag.user()))
        self.assertIsNone(self.table.update(MakeSelection()))
        self.assertIsNone(self.table.update(Yank()))

    def test_draw_shows_header_rows_and_count(self) -> None:
        frame = Frame(40, 8)
        self.table.draw(frame, Rect(0, 0, 40, 8))
        text = "\n".join(frame.lines())
        self.assertIn("results (2 rows) [alt+3]", text)
        self.assertIn("id", text)
        self.assertIn("grace", text)


class StructureTableTests(unittest.TestCase):
    def setUp(self) -> None:
        self.table = StructureTable(copy_to_clipboard=lambda text: True)

    def test_structure_result_switches_mode(self) -> None:
        columns = ResultSet(("column_name", "data_type"), (("id", "int4"),))
        action = self.table.handle_app_event(QueryResult(columns, QueryTag.table_structure("public.users")))
        self.assertEqual(action, ChangeMode(Mode.EXPLORE_STRUCTURE))
        self.assertEqual(self.table.table, TableRef("users", "public"))
        self.assertEqual(self.table.title(), "public.users [alt+4]")

    def test_user_results_are_ignored(self) -> None:
        self.assertIsNone(self.table.handle_app_event(QueryResult(USERS, QueryTag.user())))
        self.assertEqual(self.table.result, ResultSet())

    def test_selection_is_not_a_structure_action(self) -> None:
        self.table.update(ChangeMode(Mode.EXPLORE_STRUCTURE))
        self.table.handle_app_event(QueryResult(USERS, QueryTag.table_structure("users")))
        self.assertIsNone(self.table.update(MakeSelection()))
        self.table.update(NavDown())
        self.assertEqual(self.table.selected_row(), ("2", "grace"))


if __name__ == "__main__":
    unittest.main()
