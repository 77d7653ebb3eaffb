"""Tests for terminal mode transitions.

Verifies raw-mode lifecycle safety, the alternate-screen escape payloads,
and that a suspended terminal is always reacquired.
"""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from lazybrowse.runtime.terminal import TerminalController


def _controller() -> TerminalController:
    with mock.patch("lazybrowse.runtime.terminal.termios.tcgetattr", return_value=[0]):
        return TerminalController(stdin_fd=0, stdout_fd=1)


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("lazybrowse.runtime.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "lazybrowse.runtime.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("lazybrowse.runtime.terminal.os.write") as write_mock, mock.patch(
            "lazybrowse.runtime.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        controller = _controller()

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_suspended_releases_then_reacquires_even_on_error(self) -> None:
        controller = _controller()
        calls: list[str] = []

        with mock.patch.object(
            controller, "enable_tui_mode", side_effect=lambda: calls.append("enable")
        ), mock.patch.object(controller, "disable_tui_mode", side_effect=lambda: calls.append("disable")):
            with self.assertRaises(OSError):
                with controller.suspended():
                    calls.append("child")
                    raise OSError("exec failed")

        self.assertEqual(calls, ["disable", "child", "enable"])


if __name__ == "__main__":
    unittest.main()
