import pytest

from debug import Debug
from machine import EnigmaMachine


@pytest.fixture
def machine():
    """I-II-III, UKW-B, rings AAA, window AAA, no plugs."""
    return EnigmaMachine()


@pytest.fixture
def debug_switches():
    dbg = Debug()
    saved, enabled = dbg.status(), Debug.enabled
    yield dbg
    Debug.components.update(saved)
    Debug.enabled = enabled
