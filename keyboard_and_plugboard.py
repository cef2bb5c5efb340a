# keyboard_and_plugboard.py
from __future__ import annotations

from debug import Debug
from utilities import ALPHA26, is_letter, to_index, to_letter

debug = Debug()


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    def __init__(self, alphabet: str = ALPHA26) -> None:
        self.alphabet: str = alphabet
        self.alpha_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(alphabet)
        }

    # letter → integer signal
    def forward(self, letter: str) -> int:
        try:
            signal = self.alpha_to_index[letter.upper()]
        except KeyError:
            raise ValueError(
                f"Invalid character {letter!r} for current alphabet."
            )
        debug.log("keyboard", f"{letter}->{signal}")
        return signal

    # integer signal → letter
    def backward(self, signal: int) -> str:
        if not (0 <= signal < len(self.alphabet)):
            hi = len(self.alphabet) - 1
            raise ValueError(f"Signal {signal} out of range 0–{hi}")
        return self.alphabet[signal]


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    """Steckerbrett built from a pair string such as ``"AB CD EF"``.

    Parsing is forgiving: a token that is not two distinct letters, or
    that reuses a letter already plugged by an earlier token, is dropped
    and the remaining tokens still apply.
    """

    def __init__(self, pairs: str = "") -> None:
        self.mapping: dict[str, str] = {}

        for token in pairs.upper().split():
            if len(token) != 2:
                debug.log("plugboard", f"skip {token!r}: not a pair")
                continue
            a, b = token
            if not (is_letter(a) and is_letter(b)) or a == b:
                debug.log("plugboard", f"skip {token!r}: bad letters")
                continue
            if a in self.mapping or b in self.mapping:
                debug.log("plugboard", f"skip {token!r}: letter already used")
                continue

            # passed validation → commit swap
            self.mapping[a], self.mapping[b] = b, a

    # one private helper does the job for both directions
    def _map(self, signal: int) -> int:
        letter = to_letter(signal)
        mapped = self.mapping.get(letter, letter)
        debug.log("plugboard", f"{signal}->{letter}->{mapped}")
        return to_index(mapped)

    forward = _map        # alias: signal in
    backward = _map       # alias: signal out

    def pairs(self) -> str:
        """Normalised pair string: low letter first, pairs sorted."""
        return " ".join(sorted(f"{a}{b}" for a, b in self.mapping.items() if a < b))

    def __len__(self) -> int:
        return len(self.mapping) // 2

    # nicety for debugging
    def __repr__(self) -> str:
        return f"<Plugboard {self.pairs()}>"


def validate_plugboard(text: str) -> str | None:
    """Strict check for operator input; return the first problem or None."""
    used: set[str] = set()
    for pair in text.upper().split():
        if len(pair) != 2:
            return (f"Invalid pair '{pair}'. Each connection must be "
                    f"exactly two letters (e.g., 'AB').")
        a, b = pair
        if not (is_letter(a) and is_letter(b)):
            return f"Invalid characters in pair '{pair}'. Only letters A-Z are allowed."
        if a == b:
            return f"Invalid pair '{pair}'. A letter cannot be connected to itself."
        if {a, b} & used:
            dup = a if a in used else b
            return f"Letter '{dup}' is used multiple times in plugboard connections."
        used.update((a, b))
    return None
