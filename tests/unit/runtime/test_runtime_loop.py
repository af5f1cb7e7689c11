from __future__ import annotations

import os
import unittest
from contextlib import contextmanager
from unittest import mock

from traceview.runtime import run_main_loop
from traceview.runtime.loop import viewport_rows
from traceview.runtime.terminal import TerminalController
from traceview.trace_model import sample_trace
from traceview.ui_theme import PLAIN_THEME
from traceview.viewer import new_viewer_state


class _FakeTerminal:
    def __init__(self) -> None:
        self.frames: list[str] = []
        self.raw_entries = 0
        self.raw_exits = 0

    @contextmanager
    def raw_mode(self):
        self.raw_entries += 1
        try:
            yield
        finally:
            self.raw_exits += 1

    def draw(self, frame: str) -> None:
        self.frames.append(frame)


class _ScriptedKeys:
    def __init__(self, keys: list[str]) -> None:
        self._keys = list(keys)
        self.timeouts: list[int | None] = []

    def read_key(self, timeout_ms: int | None = None) -> str:
        self.timeouts.append(timeout_ms)
        if not self._keys:
            return "q"
        return self._keys.pop(0)


class _SizeScript:
    def __init__(self, *sizes: tuple[int, int]) -> None:
        self._sizes = [os.terminal_size(size) for size in sizes]

    def __call__(self) -> os.terminal_size:
        if len(self._sizes) > 1:
            return self._sizes.pop(0)
        return self._sizes[0]


class RuntimeLoopTests(unittest.TestCase):
    def test_draws_only_when_state_changes(self) -> None:
        terminal = _FakeTerminal()
        keys = _ScriptedKeys(["j", "z", "", "j", "q"])

        final = run_main_loop(
            new_viewer_state(sample_trace()),
            terminal,
            keys,
            theme=PLAIN_THEME,
            terminal_size=_SizeScript((120, 30)),
        )

        self.assertTrue(final.quitting)
        self.assertEqual(final.cursor, 2)
        self.assertEqual(len(terminal.frames), 3)
        self.assertTrue(terminal.frames[-1].split("\n")[2].startswith(">"))
        self.assertEqual((terminal.raw_entries, terminal.raw_exits), (1, 1))

    def test_resize_sets_viewport_without_footer_row(self) -> None:
        terminal = _FakeTerminal()
        keys = _ScriptedKeys(["G", "", "q"])

        final = run_main_loop(
            new_viewer_state(sample_trace()),
            terminal,
            keys,
            theme=PLAIN_THEME,
            terminal_size=_SizeScript((100, 40), (100, 40), (50, 6)),
        )

        self.assertEqual((final.width, final.height), (50, 5))
        self.assertEqual(final.scroll, 7)
        self.assertEqual(len(terminal.frames[-1].split("\n")), 6)

    def test_key_timeouts_poll_for_resize(self) -> None:
        keys = _ScriptedKeys([])

        run_main_loop(
            new_viewer_state(sample_trace()),
            _FakeTerminal(),
            keys,
            terminal_size=_SizeScript((80, 24)),
        )

        self.assertEqual(keys.timeouts, [100])

    def test_raw_mode_is_restored_when_rendering_fails(self) -> None:
        terminal = _FakeTerminal()

        with mock.patch("traceview.runtime.loop.render_view", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                run_main_loop(
                    new_viewer_state(sample_trace()),
                    terminal,
                    _ScriptedKeys([]),
                    terminal_size=_SizeScript((80, 24)),
                )

        self.assertEqual(terminal.raw_exits, 1)

    def test_viewport_rows_reserves_footer(self) -> None:
        self.assertEqual(viewport_rows(24), 23)
        self.assertEqual(viewport_rows(1), 1)
        self.assertEqual(viewport_rows(0), 1)


class TerminalControllerTests(unittest.TestCase):
    def test_draw_clears_screen_and_uses_crlf(self) -> None:
        with mock.patch("traceview.runtime.terminal.termios.tcgetattr", return_value=["saved"]):
            controller = TerminalController(0, 1)

        with mock.patch("traceview.runtime.terminal.os.write") as write:
            controller.draw("a\nb")

        write.assert_called_once_with(1, b"\x1b[H\x1b[Ja\r\nb")

    def test_raw_mode_restores_saved_attributes(self) -> None:
        with mock.patch("traceview.runtime.terminal.termios.tcgetattr", return_value=["saved"]):
            controller = TerminalController(0, 1)

        with (
            mock.patch("traceview.runtime.terminal.tty.setraw") as setraw,
            mock.patch("traceview.runtime.terminal.termios.tcsetattr") as tcsetattr,
            mock.patch("traceview.runtime.terminal.os.write") as write,
        ):
            with controller.raw_mode():
                setraw.assert_called_once()
            tcsetattr.assert_called_once()
            self.assertEqual(tcsetattr.call_args.args[2], ["saved"])
            self.assertEqual(write.call_args_list[0].args[1], b"\x1b[?1049h\x1b[?25l")
            self.assertEqual(write.call_args_list[-1].args[1], b"\x1b[?25h\x1b[?1049l")


if __name__ == "__main__":
    unittest.main()
