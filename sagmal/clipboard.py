from __future__ import annotations

import sys

import pyperclip


def copy_to_clipboard(text: str, *, debug: bool = False) -> bool:
    """Copy ``text`` to the system clipboard.

    Clipboard failures never reach the user; the return value tells whether
    the copy happened.
    """

    try:
        pyperclip.copy(text)
    except Exception as exc:  # clipboard support varies by platform
        if debug:
            print(f"[debug] clipboard copy failed: {exc}", file=sys.stderr)
        return False
    return True


__all__ = ["copy_to_clipboard"]
