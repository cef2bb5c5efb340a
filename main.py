# main.py
from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Sequence

from configuration import ConfigurationError, MachineConfiguration, load_config
from debug import Debug
from keyboard_and_plugboard import validate_plugboard
from machine import EnigmaMachine
from utilities import format_groups, is_key, preprocess_message

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches for the text front end."""

    block: int = 5                  # display group size
    strip: bool = False             # drop non-letters before typing
    show_state: bool = True         # print the panel after every action


# ────────────────────────────────────────────────────────────────────────
#  1. Rendering
# ────────────────────────────────────────────────────────────────────────


def render_state(machine: EnigmaMachine, cfg: Config) -> str:
    state = machine.get_state()
    plugs = machine.pb.pairs() or "(none)"
    marker = " (default)" if state.is_default else ""
    lines = [
        f"Rotors       : {' '.join(state.rotor_types)}{marker}",
        f"Reflector    : {state.reflector}",
        f"Ring settings: {' '.join(state.ring_settings)}",
        f"Positions    : {' '.join(state.positions)}",
        f"Starting key : {state.starting_key}",
        f"Plugboard    : {plugs}",
        f"Input        : {format_groups(state.plaintext, cfg.block)}",
        f"Output       : {format_groups(state.ciphertext, cfg.block)}",
    ]
    return "\n".join(lines)


# ────────────────────────────────────────────────────────────────────────
#  2. REPL commands
# ────────────────────────────────────────────────────────────────────────


HELP = """\
Type text to encrypt it key by key, or use a command:
  :rotors I II III ABC   choose wheels (left to right) and window letters
  :pos ABC               set window letters only
  :rings BBB             set ring settings
  :plugs AB CD ...       set plugboard (empty clears it)
  :ukw UKW-C             choose reflector
  :save                  save current setup as default
  :reset                 back to the saved default
  :initial               back to the startup setup
  :clear                 clear the text
  :state                 show the machine
  :help                  this text
  :quit                  leave (a blank line also quits)"""


def _cmd_rotors(machine: EnigmaMachine, args: List[str]) -> str | None:
    if len(args) != 4:
        return "❌  Usage: :rotors I II III ABC"
    machine.set_rotors(args[:3], args[3])
    return None


def _cmd_pos(machine: EnigmaMachine, args: List[str]) -> str | None:
    key = "".join(args)
    if not is_key(key):
        return "❌  Need exactly 3 letters."
    machine.set_rotor_positions(key)
    return None


def _cmd_rings(machine: EnigmaMachine, args: List[str]) -> str | None:
    machine.set_ring_settings("".join(args))
    return None


def _cmd_plugs(machine: EnigmaMachine, args: List[str]) -> str | None:
    text = " ".join(args)
    err = validate_plugboard(text)
    if err:
        return f"❌  {err}"
    machine.set_plugboard(text)
    return None


def _cmd_ukw(machine: EnigmaMachine, args: List[str]) -> str | None:
    name = " ".join(args).upper()
    if name not in ("UKW-B", "UKW-C"):
        return "❌  Reflector must be UKW-B or UKW-C."
    machine.set_reflector(name)
    return None


def _cmd_save(machine: EnigmaMachine, args: List[str]) -> str | None:
    machine.save_current_as_default()
    return "Current configuration saved as default!"


COMMANDS: Dict[str, Callable[[EnigmaMachine, List[str]], str | None]] = {
    "rotors":  _cmd_rotors,
    "pos":     _cmd_pos,
    "rings":   _cmd_rings,
    "plugs":   _cmd_plugs,
    "ukw":     _cmd_ukw,
    "save":    _cmd_save,
    "reset":   lambda m, a: m.reset(),
    "initial": lambda m, a: m.reset_to_initial(),
    "clear":   lambda m, a: m.clear_text(),
    "state":   lambda m, a: None,
    "help":    lambda m, a: HELP,
}


def run_command(machine: EnigmaMachine, line: str) -> str | None:
    """Execute one ``:command``; return a message for the operator, if any."""
    words = line[1:].split()
    if not words:
        return HELP
    name, *args = words
    handler = COMMANDS.get(name.lower())
    if handler is None:
        return f"❌  Unknown command ':{name}'. Try :help"
    try:
        return handler(machine, args)
    except ConfigurationError as exc:
        return f"❌  {exc}"


def type_text(machine: EnigmaMachine, text: str, cfg: Config) -> str:
    if cfg.strip:
        text = preprocess_message(text)
    return "".join(machine.encrypt_char(ch) for ch in text)


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Three-rotor Enigma simulator")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to encrypt. If omitted, an interactive REPL starts.")
    p.add_argument("--rotors", nargs=3, metavar="ROTOR", default=["I", "II", "III"], help="Wheel order, left to right. Default: I II III")
    p.add_argument("--reflector", default="UKW-B", choices=["UKW-B", "UKW-C"], help="Default: UKW-B")
    p.add_argument("--rings", default="AAA", metavar="KEY", help="Ring settings as three letters. Default: AAA")
    p.add_argument("--positions", default="AAA", metavar="KEY", help="Starting window letters. Default: AAA")
    p.add_argument("--plugs", default="", metavar="PAIRS", help='Plugboard pairs, e.g. "AB CD EF"')
    p.add_argument("--config", metavar="FILE", help="Load machine settings from JSON instead of the flags above.")
    p.add_argument("--strip", action="store_true", help="Drop spaces, digits and punctuation before encrypting.")
    p.add_argument("--block", type=int, default=5, help="Output group size. Default: 5")
    p.add_argument("--verbose", action="store_true", help="Log every stage of the signal path.")
    return p.parse_args(argv)


def build_machine(args: argparse.Namespace) -> EnigmaMachine:
    if args.config:
        return EnigmaMachine.from_configuration(load_config(Path(args.config)))

    err = validate_plugboard(args.plugs)
    if err:
        raise ConfigurationError(err)
    return EnigmaMachine.from_configuration(
        MachineConfiguration(
            rotor_types=tuple(args.rotors),
            reflector=args.reflector,
            ring_settings=args.rings,
            positions=args.positions,
            plugboard=args.plugs,
        )
    )


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    if args.verbose:
        debug.enable_all()

    try:
        machine = build_machine(args)
    except (ConfigurationError, OSError) as exc:
        raise SystemExit(f"❌  {exc}")

    cfg = Config(block=args.block, strip=args.strip)

    # one‑shot mode ------------------------------------------------------
    if args.message is not None:
        cipher = type_text(machine, args.message, cfg)
        print("Encrypted:", format_groups(cipher, cfg.block))
        return

    # interactive REPL ---------------------------------------------------
    print(HELP)
    print()
    print(render_state(machine, cfg))
    while True:
        try:
            line = input("\n> ")
        except EOFError:
            break
        if not line.strip() or line.strip().lower() == ":quit":
            break

        if line.startswith(":"):
            msg = run_command(machine, line.strip())
            if msg:
                print(msg)
        else:
            type_text(machine, line, cfg)

        if cfg.show_state:
            print(render_state(machine, cfg))


if __name__ == "__main__":
    main()
