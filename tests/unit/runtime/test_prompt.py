from __future__ import annotations

import os
import unittest
from unittest import mock

from lazybrowse.runtime.prompt import (
    PROMPT_APPEND,
    PROMPT_BACKSPACE,
    PROMPT_SUBMIT,
    PromptKey,
    TerminalPrompt,
)
from lazybrowse.ui_theme import PLAIN_THEME


def _prompt(keys: list[str]) -> TerminalPrompt:
    feed = iter(keys)
    prompt = TerminalPrompt(
        stdin_fd=0,
        stdout_fd=1,
        read=lambda *_args, **_kwargs: next(feed),
        get_terminal_size=lambda *_args: os.terminal_size((40, 10)),
        theme=PLAIN_THEME,
    )
    return prompt


class PromptLineTests(unittest.TestCase):
    def test_enter_returns_typed_text(self) -> None:
        prompt = _prompt(["d", "o", "c", "s", "ENTER_CR"])
        with mock.patch("lazybrowse.runtime.prompt.os.write"):
            self.assertEqual(prompt.prompt_line("chdir: "), "docs")

    def test_backspace_and_ctrl_u_edit_the_line(self) -> None:
        prompt = _prompt(["a", "b", "BACKSPACE", "c", "CTRL_U", "x", "ENTER_LF"])
        with mock.patch("lazybrowse.runtime.prompt.os.write"):
            self.assertEqual(prompt.prompt_line("filter: "), "x")

    def test_escape_and_empty_submit_cancel(self) -> None:
        prompt = _prompt(["a", "ESC"])
        with mock.patch("lazybrowse.runtime.prompt.os.write"):
            self.assertIsNone(prompt.prompt_line("filter: "))

        prompt = _prompt(["ENTER_CR"])
        with mock.patch("lazybrowse.runtime.prompt.os.write"):
            self.assertIsNone(prompt.prompt_line("filter: "))

    def test_named_keys_are_not_inserted(self) -> None:
        prompt = _prompt(["UP", "a", "TAB", "ENTER_CR"])
        with mock.patch("lazybrowse.runtime.prompt.os.write"):
            self.assertEqual(prompt.prompt_line("chdir: "), "a")

    def test_prompt_is_drawn_on_last_row_and_cursor_hidden_after(self) -> None:
        prompt = _prompt(["a", "ENTER_CR"])
        with mock.patch("lazybrowse.runtime.prompt.os.write") as write_mock:
            prompt.prompt_line("chdir: ")

        payloads = [call.args[1] for call in write_mock.call_args_list]
        self.assertTrue(payloads[0].startswith(b"\x1b[10;1H\x1b[2Kchdir: "))
        self.assertIn(b"chdir: a", payloads[1])
        self.assertEqual(payloads[-1], b"\x1b[?25l")


class PromptIncrementalTests(unittest.TestCase):
    def test_printable_key_appends(self) -> None:
        prompt = _prompt(["z"])
        with mock.patch("lazybrowse.runtime.prompt.os.write"):
            self.assertEqual(prompt.prompt_incremental("type: ", "ab"), PromptKey(PROMPT_APPEND, "z"))

    def test_backspace_and_submit_keys(self) -> None:
        for raw, expected in (
            ("BACKSPACE", PromptKey(PROMPT_BACKSPACE)),
            ("ENTER_CR", PromptKey(PROMPT_SUBMIT)),
            ("ENTER_LF", PromptKey(PROMPT_SUBMIT)),
            ("ESC", PromptKey(PROMPT_SUBMIT)),
        ):
            prompt = _prompt([raw])
            with mock.patch("lazybrowse.runtime.prompt.os.write"):
                self.assertEqual(prompt.prompt_incremental("type: ", ""), expected)

    def test_unrelated_keys_are_skipped(self) -> None:
        prompt = _prompt(["DOWN", "CTRL_L", "q"])
        with mock.patch("lazybrowse.runtime.prompt.os.write"):
            self.assertEqual(prompt.prompt_incremental("type: ", ""), PromptKey(PROMPT_APPEND, "q"))


if __name__ == "__main__":
    unittest.main()
