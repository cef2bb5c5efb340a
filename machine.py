# machine.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from configuration import ConfigurationError, MachineConfiguration
from debug import Debug
from keyboard_and_plugboard import Keyboard, Plugboard
from rotor_and_reflector import Reflector, Rotor
from utilities import advance, is_key, is_letter, to_index, to_letter
from wheels import get_reflector, get_rotor, reflector_dict

debug = Debug()

ROTOR_COUNT = 3


@dataclass(slots=True)
class RotorSlot:
    """One wheel position in the machine (left, middle or right)."""

    rotor: Rotor
    ring: int = 0        # Ringstellung, A=0
    position: int = 0    # letter showing in the window, A=0

    def at_notch(self) -> bool:
        return self.rotor.at_notch(self.position)

    def step(self) -> None:
        self.position = advance(self.position)


@dataclass(frozen=True, slots=True)
class MachineState:
    """Read-only snapshot handed to whatever renders the machine."""

    rotor_types: Tuple[str, ...]
    positions: str
    ring_settings: str
    reflector: str
    plugboard: Dict[str, str]
    plaintext: str
    ciphertext: str
    is_default: bool
    starting_key: str


def _as_key(letters: str | Iterable[str]) -> str:
    return "".join(letters).upper()


class EnigmaMachine:
    """Three-rotor Enigma with plugboard, ring settings and double stepping.

    The machine remembers three configurations: the one it was built with
    (*initial*), a user-saveable *default* that starts out equal to it, and
    the live setup. Every configuration change wipes the session text.
    """

    def __init__(
        self,
        rotors: Sequence[str] = ("I", "II", "III"),
        reflector: str = "UKW-B",
        ring_settings: str = "AAA",
        positions: str = "AAA",
        plugboard: str = "",
    ) -> None:
        initial = MachineConfiguration(
            tuple(rotors), reflector, _as_key(ring_settings), _as_key(positions), plugboard
        )
        self._check(initial)

        self.kb = Keyboard()
        self._initial = initial
        self._default = initial
        self._plaintext: List[str] = []
        self._ciphertext: List[str] = []

        self._apply(initial)

    @classmethod
    def from_configuration(cls, cfg: MachineConfiguration) -> "EnigmaMachine":
        return cls(cfg.rotor_types, cfg.reflector, cfg.ring_settings, cfg.positions, cfg.plugboard)

    # ── configuration plumbing ──────────────────────────────────

    @staticmethod
    def _check(cfg: MachineConfiguration) -> None:
        if len(cfg.rotor_types) != ROTOR_COUNT:
            raise ConfigurationError(f"Need exactly {ROTOR_COUNT} rotors, got {len(cfg.rotor_types)}")
        for name in cfg.rotor_types:
            get_rotor(name)
        get_reflector(cfg.reflector)
        if not is_key(cfg.ring_settings, ROTOR_COUNT):
            raise ConfigurationError(f"Ring settings must be {ROTOR_COUNT} letters: {cfg.ring_settings!r}")
        if not is_key(cfg.positions, ROTOR_COUNT):
            raise ConfigurationError(f"Rotor positions must be {ROTOR_COUNT} letters: {cfg.positions!r}")

    def _apply(self, cfg: MachineConfiguration) -> None:
        self.slots: List[RotorSlot] = [
            RotorSlot(get_rotor(name), to_index(ring), to_index(pos))
            for name, ring, pos in zip(cfg.rotor_types, cfg.ring_settings, cfg.positions)
        ]
        self.reflector: Reflector = get_reflector(cfg.reflector)
        self.pb = Plugboard(cfg.plugboard)
        self.message_key: str = cfg.positions
        debug.log("config", f"applied {cfg}")

    @property
    def rotor_types(self) -> Tuple[str, ...]:
        return tuple(slot.rotor.name for slot in self.slots)

    @property
    def positions(self) -> str:
        return "".join(to_letter(slot.position) for slot in self.slots)

    @property
    def ring_settings(self) -> str:
        return "".join(to_letter(slot.ring) for slot in self.slots)

    @property
    def current_configuration(self) -> MachineConfiguration:
        return MachineConfiguration(
            self.rotor_types,
            self.reflector.name,
            self.ring_settings,
            self.positions,
            self.pb.pairs(),
        )

    @property
    def default_configuration(self) -> MachineConfiguration:
        return self._default

    @property
    def initial_configuration(self) -> MachineConfiguration:
        return self._initial

    @property
    def is_default(self) -> bool:
        return self.current_configuration.same_setup(self._default)

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        """Advance the wheels for one key-press, double step included."""
        left, middle, right = self.slots

        # all notch readings are taken before anything moves
        step_L = middle.at_notch()
        step_M = step_L or right.at_notch()

        right.step()
        if step_M:
            middle.step()
        if step_L:
            left.step()

        debug.log("stepping", f"window {self.positions}")

    # ── encipher one symbol  ────────────────────────────────────

    def _encipher(self, letter: str) -> str:
        if not is_letter(letter):
            return letter

        signal = self.kb.forward(letter)
        signal = self.pb.forward(signal)

        self._step_rotors()

        for slot in reversed(self.slots):
            signal = slot.rotor.forward(signal, slot.position, slot.ring)

        signal = self.reflector.reflect(signal)

        for slot in self.slots:
            signal = slot.rotor.backward(signal, slot.position, slot.ring)

        signal = self.pb.backward(signal)
        out_ch = self.kb.backward(signal)
        debug.log("encipher", f"{letter.upper()}->{out_ch}")
        return out_ch

    def encrypt_char(self, ch: str) -> str:
        """Type one key and record it in the session text."""
        if len(ch) != 1:
            raise ValueError(f"Expected a single character, got {ch!r}")

        out_ch = self._encipher(ch)
        self._plaintext.append(ch.upper() if is_letter(ch) else ch)
        self._ciphertext.append(out_ch)
        return out_ch

    def process_text(self, text: str) -> str:
        """Run *text* through the machine without touching the session text.

        The rotors still move, so call ``set_rotor_positions`` (or ``reset``)
        first when decrypting what was just encrypted.
        """
        return "".join(self._encipher(ch) for ch in text)

    # ── mutators ────────────────────────────────────────────────

    def set_rotors(self, types: Sequence[str], positions: str | Sequence[str]) -> None:
        key = _as_key(positions)
        if len(types) != ROTOR_COUNT:
            raise ConfigurationError(f"Need exactly {ROTOR_COUNT} rotors, got {len(types)}")
        if not is_key(key, ROTOR_COUNT):
            raise ConfigurationError(f"Rotor positions must be {ROTOR_COUNT} letters: {key!r}")
        wheels = [get_rotor(name) for name in types]

        for slot, rotor, letter in zip(self.slots, wheels, key):
            slot.rotor = rotor
            slot.position = to_index(letter)
        self.message_key = key
        debug.log("config", f"rotors {self.rotor_types} at {key}")
        self.clear_text()

    def set_rotor_positions(self, positions: str | Sequence[str] | None) -> None:
        if positions is None:
            return
        key = _as_key(positions)
        if not is_key(key, ROTOR_COUNT):
            debug.log("config", f"ignored positions {key!r}")
            return

        for slot, letter in zip(self.slots, key):
            slot.position = to_index(letter)
        self.message_key = key
        self.clear_text()

    def set_ring_settings(self, settings: str | Sequence[str]) -> None:
        key = _as_key(settings)
        if not is_key(key, ROTOR_COUNT):
            raise ConfigurationError(f"Ring settings must be {ROTOR_COUNT} letters: {key!r}")

        for slot, letter in zip(self.slots, key):
            slot.ring = to_index(letter)
        self.clear_text()

    def set_plugboard(self, pairs: str) -> None:
        self.pb = Plugboard(pairs)
        debug.log("config", f"plugboard {self.pb.pairs()!r}")
        self.clear_text()

    def set_reflector(self, name: str) -> None:
        name = name.strip().upper()
        if name not in reflector_dict:
            debug.log("config", f"ignored reflector {name!r}")
            return
        self.reflector = reflector_dict[name]
        self.clear_text()

    def reset(self) -> None:
        """Go back to the saved default configuration."""
        self._apply(self._default)
        self.clear_text()

    def reset_to_initial(self) -> None:
        self._apply(self._initial)
        self.clear_text()

    def save_current_as_default(self) -> None:
        self._default = self.current_configuration
        debug.log("config", f"default is now {self._default}")

    def clear_text(self) -> None:
        self._plaintext.clear()
        self._ciphertext.clear()

    # ── query ───────────────────────────────────────────────────

    @property
    def plaintext(self) -> str:
        return "".join(self._plaintext)

    @property
    def ciphertext(self) -> str:
        return "".join(self._ciphertext)

    def get_state(self) -> MachineState:
        return MachineState(
            rotor_types=self.rotor_types,
            positions=self.positions,
            ring_settings=self.ring_settings,
            reflector=self.reflector.name,
            plugboard=dict(self.pb.mapping),
            plaintext=self.plaintext,
            ciphertext=self.ciphertext,
            is_default=self.is_default,
            starting_key=self.message_key,
        )

    def __repr__(self) -> str:
        rotors = " ".join(self.rotor_types)
        return (f"<EnigmaMachine {rotors} {self.reflector.name} "
                f"rings={self.ring_settings} pos={self.positions} plugs={self.pb.pairs()!r}>")
