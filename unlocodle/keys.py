"""
Keyboard mapping for the physical and on-screen keyboards.
Backspace deletes, Enter submits, a single letter/digit is typed (uppercased).
Held-down repeats and shortcuts (meta/ctrl + key) do nothing.
"""

from .store import GameController, is_valid_letter

def dispatch_key(
    controller: GameController,
    key: str,
    repeat: bool = False,
    meta_key: bool = False,
    ctrl_key: bool = False,
) -> None:
    if repeat:
        return
    if key == "Backspace":
        controller.delete_letter()
    elif key == "Enter":
        controller.enter_guess()
    elif is_valid_letter(key) and not (meta_key or ctrl_key):
        controller.input_letter(key.upper())
