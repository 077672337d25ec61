"""Border presets, glyph sequences, and the shifts they derive."""

import unittest

from foldpeek.border import BorderShift, border_glyphs, normalize_border, resolve_border_shift
from foldpeek.errors import ConfigurationError


class ResolveBorderShiftTests(unittest.TestCase):
    def test_named_presets_use_fixed_tables(self) -> None:
        expected = {
            "none": (0, 0, 0, 0),
            "single": (-1, -1, -1, -1),
            "double": (-1, -1, -1, -1),
            "rounded": (-1, -1, -1, -1),
            "solid": (-1, -1, -1, -1),
            "shadow": (0, -1, -1, 0),
        }
        for name, shift in expected.items():
            with self.subTest(name=name):
                self.assertEqual(resolve_border_shift(name).as_tuple(), shift)

    def test_glyph_sequence_shift_is_zero_only_for_empty_edges(self) -> None:
        shift = resolve_border_shift([" ", "", " ", " ", " ", " ", " ", " "])
        self.assertEqual(shift, BorderShift(top=0, right=-1, bottom=-1, left=-1))

    def test_corner_glyphs_do_not_affect_shift(self) -> None:
        shift = resolve_border_shift(["", "-", "", "", "", "-", "", ""])
        self.assertEqual(shift.as_tuple(), (-1, 0, -1, 0))

    def test_unknown_preset_is_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_border_shift("fancy")

    def test_non_string_non_sequence_is_rejected(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            resolve_border_shift(42)
        self.assertIn("42", str(ctx.exception))

    def test_sequence_must_hold_eight_strings(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_border_shift([" "] * 7)
        with self.assertRaises(ConfigurationError):
            resolve_border_shift([" "] * 7 + [1])


class BorderGlyphTests(unittest.TestCase):
    def test_presets_expand_to_eight_glyphs(self) -> None:
        glyphs = border_glyphs("rounded")
        self.assertEqual(len(glyphs), 8)
        self.assertEqual(glyphs[0], "╭")

    def test_sequences_are_normalized_to_tuples(self) -> None:
        self.assertEqual(normalize_border(list("abcdefgh")), tuple("abcdefgh"))


if __name__ == "__main__":
    unittest.main()
