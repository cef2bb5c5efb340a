# rotor_and_reflector.py
from __future__ import annotations

from debug import Debug
from utilities import ALPHA26, SIZE, advance, caesar_shift, retreat, rotate_left, to_index, to_letter

debug = Debug()


class Rotor:
    """A wheel's fixed wiring and turnover notch.

    Position and ring setting are not stored here; they belong to the slot
    the wheel is mounted in, so one Rotor can be shared by every machine.
    """

    __slots__ = ("name", "wiring", "notch", "_effective")

    def __init__(self, name: str, wiring: str, notch: str) -> None:
        if sorted(wiring) != sorted(ALPHA26):
            raise ValueError("wiring must be a permutation of alphabet")
        if len(notch) != 1 or notch not in ALPHA26:
            raise ValueError("Notch must be a single letter of the alphabet")

        self.name = name
        self.wiring = wiring
        self.notch = notch
        # ring offset → ring-adjusted wiring
        self._effective: dict[int, str] = {0: wiring}

    # ── ring & notch helpers ──────────────────────────────────────
    def effective_wiring(self, ring: int) -> str:
        """Wiring as seen through a ring setting of *ring* (A=0).

        Every output letter moves forward by the offset and the whole
        string turns with it, i.e. ``shifted[26-r:] + shifted[:26-r]``.
        """
        ring %= SIZE
        if ring not in self._effective:
            shifted = caesar_shift(self.wiring, ring)
            self._effective[ring] = rotate_left(shifted, SIZE - ring)
        return self._effective[ring]

    def at_notch(self, position: int) -> bool:
        return to_letter(position) == self.notch

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int, position: int, ring: int) -> int:
        wiring = self.effective_wiring(ring)
        mapped = to_index(wiring[advance(sig, position)])
        out = retreat(mapped, position)
        debug.log("rotor", f"{self.name} fwd {to_letter(sig)}->{to_letter(out)}")
        return out

    def backward(self, sig: int, position: int, ring: int) -> int:
        wiring = self.effective_wiring(ring)
        index = wiring.index(to_letter(advance(sig, position)))
        out = retreat(index, position)
        debug.log("rotor", f"{self.name} bwd {to_letter(sig)}->{to_letter(out)}")
        return out

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return f"<Rotor {self.name} notch={self.notch}>"


class Reflector:
    def __init__(self, name: str, pairs: str) -> None:
        mapping: dict[str, str] = {}
        for a, b in pairs.split():
            if a == b or a in mapping or b in mapping:
                raise ValueError("Reflector wiring must be an involution with no fixed points")
            mapping[a], mapping[b] = b, a

        if set(mapping) != set(ALPHA26):
            raise ValueError("Reflector wiring must cover the whole alphabet")

        self.name = name
        self.mapping = mapping

    def reflect(self, sig: int) -> int:
        letter = to_letter(sig)
        mapped = self.mapping.get(letter, letter)
        debug.log("reflector", f"{self.name} {letter}->{mapped}")
        return to_index(mapped)

    @property
    def wiring(self) -> str:
        """Reflector as a 26-letter substitution string (A→, B→, …)."""
        return "".join(self.mapping[ch] for ch in ALPHA26)

    def __repr__(self) -> str:
        return f"<Reflector {self.name}>"
