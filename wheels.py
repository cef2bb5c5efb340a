# wheels.py
from __future__ import annotations

from typing import Dict

from configuration import ConfigurationError
from rotor_and_reflector import Reflector, Rotor

# ────────────────────────────────────────────────────────────────────────
#  Wheel database (Enigma I / M3)
# ────────────────────────────────────────────────────────────────────────

I   = Rotor("I",   "EKMFLGDQVZNTOWYHXUSPAIBRCJ", notch="Q")
II  = Rotor("II",  "AJDKSIRUXBLHWTMCQGZNPYFVOE", notch="E")
III = Rotor("III", "BDFHJLCPRTXVZNYEIWGAKMUSQO", notch="V")
IV  = Rotor("IV",  "ESOVPZJAYQUIRHXLNFTGKDCMWB", notch="J")
V   = Rotor("V",   "VZBRGITYUPSDNHLXAWMJQOFECK", notch="Z")

UKW_B = Reflector("UKW-B", "AY BR CU DH EQ FS GL IP JX KN MO TZ VW")
UKW_C = Reflector("UKW-C", "AF BV CP DJ EI GO HY KR LZ MX NW QT SU")

rotor_dict: Dict[str, Rotor] = {r.name: r for r in (I, II, III, IV, V)}
reflector_dict: Dict[str, Reflector] = {r.name: r for r in (UKW_B, UKW_C)}


def get_rotor(name: str) -> Rotor:
    try:
        return rotor_dict[name.strip().upper()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown rotor {name!r}. Expected one of {list(rotor_dict)}"
        ) from None


def get_reflector(name: str) -> Reflector:
    try:
        return reflector_dict[name.strip().upper()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown reflector {name!r}. Expected one of {list(reflector_dict)}"
        ) from None


__all__ = [
    "get_reflector",
    "get_rotor",
    "reflector_dict",
    "rotor_dict",
]
