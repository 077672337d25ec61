"""Preview sizing and anchoring math."""

import unittest

from foldpeek.border import BorderShift
from foldpeek.geometry import (
    FoldRegion,
    ViewportGeometry,
    can_place,
    compute_anchor,
    compute_size,
    extract_fold_content,
    plan_preview,
    room_below,
    room_right,
)


class ExtractFoldContentTests(unittest.TestCase):
    def test_strips_first_line_indent_from_every_line(self) -> None:
        content = extract_fold_content(["    if ready:", "        start()", "    done = True"])
        self.assertEqual(content.indent, 4)
        self.assertEqual(content.lines, ("if ready:", "    start()", "done = True"))
        self.assertEqual(content.max_width, 11)

    def test_indent_comes_from_first_line_only(self) -> None:
        content = extract_fold_content(["    a", "  bcdef"])
        self.assertEqual(content.indent, 4)
        self.assertEqual(content.lines, ("a", "def"))

    def test_unindented_first_line_keeps_everything(self) -> None:
        content = extract_fold_content(["def f():", "    return 1"])
        self.assertEqual(content.indent, 0)
        self.assertEqual(content.lines, ("def f():", "    return 1"))
        self.assertEqual(content.max_width, 12)

    def test_only_ascii_whitespace_counts_as_indent(self) -> None:
        content = extract_fold_content(["\u3000x", "\u3000y"])
        self.assertEqual(content.indent, 0)
        self.assertEqual(content.lines, ("\u3000x", "\u3000y"))

    def test_max_width_counts_wide_characters(self) -> None:
        content = extract_fold_content(["  日本語", "  ab"])
        self.assertEqual(content.max_width, 6)

    def test_empty_fold_has_zero_width(self) -> None:
        content = extract_fold_content([])
        self.assertEqual((content.lines, content.indent, content.max_width), ((), 0, 0))


class ComputeSizeTests(unittest.TestCase):
    def test_small_content_gets_content_size_plus_border_column(self) -> None:
        self.assertEqual(compute_size(20, 5, 72, 26), (21, 5))

    def test_wide_content_is_clamped_to_room_right(self) -> None:
        self.assertEqual(compute_size(100, 5, 72, 26), (71, 5))
        self.assertEqual(compute_size(70, 5, 72, 26), (71, 5))
        self.assertEqual(compute_size(69, 5, 72, 26), (70, 5))

    def test_tall_content_is_clamped_to_room_below(self) -> None:
        self.assertEqual(compute_size(10, 40, 72, 26), (11, 26))
        self.assertEqual(compute_size(10, 26, 72, 26), (11, 26))

    def test_zero_width_content_still_gets_one_column(self) -> None:
        self.assertEqual(compute_size(0, 1, 10, 10), (1, 1))

    def test_size_never_exceeds_available_room(self) -> None:
        for max_width in range(0, 30, 3):
            for line_count in range(1, 30, 4):
                for right in range(2, 25, 5):
                    for below in range(1, 25, 6):
                        width, height = compute_size(max_width, line_count, right, below)
                        self.assertLessEqual(width, right - 1)
                        self.assertLessEqual(height, below)


class RoomAndAnchorTests(unittest.TestCase):
    def test_room_right_subtracts_gutter_and_indent(self) -> None:
        self.assertEqual(room_right(80, 4, 4), 72)

    def test_room_below_counts_cursor_row(self) -> None:
        self.assertEqual(room_below(30, 5), 26)
        self.assertEqual(room_below(30, 30), 1)

    def test_anchor_is_zero_indexed_and_border_shifted(self) -> None:
        anchor = compute_anchor(10, 4, BorderShift(-1, -1, -1, -1))
        self.assertEqual((anchor.line, anchor.col, anchor.row_offset, anchor.col_offset), (9, 4, -1, -1))

    def test_viewport_snapshot_derives_room(self) -> None:
        geometry = ViewportGeometry(height=30, width=80, gutter_width=4, cursor_row=5, indent=4)
        self.assertEqual((geometry.room_right, geometry.room_below), (72, 26))


class PlanPreviewTests(unittest.TestCase):
    def _fold(self) -> FoldRegion:
        content = extract_fold_content(["    if ready:", "        start()"])
        return FoldRegion(start=10, end=11, content=content)

    def test_plan_combines_anchor_and_size(self) -> None:
        geometry = ViewportGeometry(height=30, width=80, gutter_width=4, cursor_row=5, indent=4)
        placement = plan_preview(self._fold(), geometry, BorderShift(0, -1, -1, -1))
        assert placement is not None
        self.assertEqual((placement.width, placement.height), (12, 2))
        self.assertEqual((placement.anchor.line, placement.anchor.col), (9, 4))

    def test_viewport_narrower_than_gutter_cannot_place(self) -> None:
        geometry = ViewportGeometry(height=30, width=3, gutter_width=4, cursor_row=5, indent=0)
        self.assertFalse(can_place(geometry))
        self.assertIsNone(plan_preview(self._fold(), geometry, BorderShift()))


if __name__ == "__main__":
    unittest.main()
