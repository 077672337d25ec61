"""Key amendment registry and the default preview bindings."""

from __future__ import annotations

import unittest

from foldpeek.bindings import DEFAULT_BINDINGS, KeymapRegistry, install_bindings
from foldpeek.commands import PreviewCommands
from foldpeek.config import resolve_config
from foldpeek.controller import PreviewController, PreviewState
from foldpeek.textview import TextBuffer, TextWindow


def _build_window() -> tuple[TextWindow, PreviewCommands]:
    lines = [f"line {n}" for n in range(1, 31)]
    lines[4:8] = ["  block:", "    a = 1", "    b = 2", "  end"]
    window = TextWindow(TextBuffer(lines=lines, filetype="yaml"), width=60, height=20)
    window.add_fold(5, 8)
    window.move_cursor(5)
    commands = PreviewCommands(PreviewController(window, resolve_config()))
    install_bindings(window.keymap, commands)
    return window, commands


class KeymapRegistryTests(unittest.TestCase):
    def test_amend_passes_previous_handler_as_fallback(self) -> None:
        registry = KeymapRegistry()
        registry.register("n", "x", lambda: "plain")
        registry.amend("n", "x", lambda original: f"wrapped {original()}")
        self.assertEqual(registry.dispatch("n", "x"), "wrapped plain")

    def test_amending_twice_nests_wrappers(self) -> None:
        registry = KeymapRegistry()
        registry.register("n", "x", lambda: "0")
        registry.amend("n", "x", lambda original: original() + "1")
        registry.amend("n", "x", lambda original: original() + "2")
        self.assertEqual(registry.dispatch("n", "x"), "012")

    def test_unbound_key_gets_noop_fallback(self) -> None:
        registry = KeymapRegistry()
        registry.amend("n", "q", lambda original: original())
        self.assertIsNone(registry.dispatch("n", "q"))
        self.assertIsNone(registry.dispatch("n", "missing"))
        self.assertEqual(registry.keys("n"), ["q"])

    def test_modes_are_separate(self) -> None:
        registry = KeymapRegistry()
        registry.register("n", "x", lambda: "normal")
        self.assertIsNone(registry.dispatch("i", "x"))


class DefaultBindingTests(unittest.TestCase):
    def test_default_set_wraps_seven_normal_mode_keys(self) -> None:
        registry = KeymapRegistry()
        _window, commands = _build_window()
        self.assertEqual(install_bindings(registry, commands), 7)
        self.assertEqual(registry.keys("n"), ["h", "l", "zM", "zO", "zR", "zc", "zo"])
        self.assertTrue(all(binding.mode == "n" for binding in DEFAULT_BINDINGS))

    def test_h_opens_preview_then_opens_fold(self) -> None:
        window, commands = _build_window()
        window.press("h")
        self.assertIs(commands.controller.state, PreviewState.OPEN)

        window.press("h")
        self.assertIsNone(window.closed_fold_at(5))
        window.run_pending_ticks()
        self.assertIs(commands.controller.state, PreviewState.CLOSED)

    def test_h_off_fold_moves_cursor_left(self) -> None:
        window, _commands = _build_window()
        window.move_cursor(2, 3)
        window.press("h")
        self.assertEqual(window.cursor_col, 2)

    def test_l_off_fold_moves_cursor_right(self) -> None:
        window, _commands = _build_window()
        window.move_cursor(2, 0)
        window.press("l")
        self.assertEqual(window.cursor_col, 1)

    def test_zc_closes_preview_immediately_then_closes_fold(self) -> None:
        window, commands = _build_window()
        window.press("h")
        window.press("zo")
        window.run_pending_ticks()
        window.press("h")
        self.assertIs(commands.controller.state, PreviewState.CLOSED)
        self.assertIsNone(window.closed_fold_at(5))

        window.press("zc")
        self.assertEqual(window.closed_fold_at(5), (5, 8))

        window.press("h")
        self.assertIs(commands.controller.state, PreviewState.OPEN)
        window.press("zM")
        self.assertIs(commands.controller.state, PreviewState.CLOSED)
        self.assertEqual(window.scheduler.pending_count(), 0)

    def test_zr_dismisses_on_next_tick_and_opens_all_folds(self) -> None:
        window, commands = _build_window()
        window.press("h")
        window.press("zR")
        self.assertIsNone(window.closed_fold_at(5))
        self.assertIs(commands.controller.state, PreviewState.OPEN)
        window.run_pending_ticks()
        self.assertIs(commands.controller.state, PreviewState.CLOSED)


if __name__ == "__main__":
    unittest.main()
