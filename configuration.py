# configuration.py
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Tuple

from keyboard_and_plugboard import Plugboard


class ConfigurationError(ValueError):
    """Raised for rotor / reflector ids or key strings the machine cannot use."""


@dataclass(frozen=True, slots=True)
class MachineConfiguration:
    """The unit of save / restore: wheels, rings, window letters, plugs."""

    rotor_types: Tuple[str, str, str] = ("I", "II", "III")
    reflector: str = "UKW-B"
    ring_settings: str = "AAA"
    positions: str = "AAA"
    plugboard: str = ""

    def __post_init__(self) -> None:
        # frozen → go through object.__setattr__ to normalise
        object.__setattr__(self, "rotor_types", tuple(r.upper() for r in self.rotor_types))
        object.__setattr__(self, "reflector", self.reflector.upper())
        object.__setattr__(self, "ring_settings", self.ring_settings.upper())
        object.__setattr__(self, "positions", self.positions.upper())
        object.__setattr__(self, "plugboard", Plugboard(self.plugboard).pairs())

    def same_setup(self, other: "MachineConfiguration") -> bool:
        """Equal in everything except the window positions."""
        return replace(self, positions=other.positions) == other

    # ── JSON shape ───────────────────────────────────────────────
    @classmethod
    def from_dict(cls, data: dict) -> "MachineConfiguration":
        required = {"rotors", "reflector"}
        missing = required - data.keys()
        if missing:
            raise ConfigurationError(f"Missing keys in config: {', '.join(sorted(missing))}")
        rotors = data["rotors"]
        if isinstance(rotors, str):
            rotors = rotors.split()
        return cls(
            rotor_types=tuple(rotors),
            reflector=data["reflector"],
            ring_settings=data.get("ring_settings", "AAA"),
            positions=data.get("positions", "AAA"),
            plugboard=data.get("plugboard", ""),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["rotors"] = list(data.pop("rotor_types"))
        return data


def load_config(path: str | Path) -> MachineConfiguration:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object")
    return MachineConfiguration.from_dict(data)
