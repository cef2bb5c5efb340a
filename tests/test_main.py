import json

import pytest

import main


def test_one_shot(capsys):
    main.main(["-m", "AAAAA"])
    assert capsys.readouterr().out.strip() == "Encrypted: BDZGO"


def test_one_shot_with_rings(capsys):
    main.main(["-m", "aaaaa", "--rings", "BBB"])
    assert capsys.readouterr().out.strip() == "Encrypted: EWTYX"


def test_one_shot_strip(capsys):
    main.main(["-m", "AA AA-A", "--strip"])
    assert capsys.readouterr().out.strip() == "Encrypted: BDZGO"


def test_one_shot_groups(capsys):
    main.main(["-m", "AAAAAA", "--block", "3"])
    assert capsys.readouterr().out.strip().startswith("Encrypted: BDZ GO")


def test_config_file(tmp_path, capsys):
    path = tmp_path / "enigma.json"
    path.write_text(json.dumps({"rotors": ["I", "II", "III"], "reflector": "UKW-B"}), encoding="utf-8")
    main.main(["--config", str(path), "-m", "AAAAA"])
    assert "BDZGO" in capsys.readouterr().out


def test_bad_plugboard_flag():
    with pytest.raises(SystemExit):
        main.main(["--plugs", "AB BC", "-m", "A"])


def test_bad_rotor_flag():
    with pytest.raises(SystemExit):
        main.main(["--rotors", "I", "II", "IX", "-m", "A"])


def test_repl(monkeypatch, capsys):
    lines = iter(["AAAAA", ":save", ":plugs AB", ":reset", "AAAAA", ":pos XYZ", ":quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    main.main([])
    out = capsys.readouterr().out
    assert "Output       : BDZGO" in out
    assert "Current configuration saved as default!" in out
    assert "Plugboard    : AB" in out
    assert "Starting key : XYZ" in out


def test_repl_stops_on_eof(monkeypatch, capsys):
    def fake_input(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    main.main([])
    assert "Rotors       : I II III (default)" in capsys.readouterr().out


@pytest.mark.parametrize(
    "line,fragment",
    [
        (":rotors I II", "Usage"),
        (":rotors I II IX AAA", "Unknown rotor"),
        (":pos AB", "3 letters"),
        (":rings A", "Ring settings"),
        (":plugs AA", "itself"),
        (":ukw UKW-A", "UKW-B or UKW-C"),
        (":warp", "Unknown command"),
    ],
)
def test_command_errors(machine, line, fragment):
    assert fragment in main.run_command(machine, line)


def test_commands_drive_machine(machine):
    assert main.run_command(machine, ":rotors V IV III QEV") is None
    assert machine.rotor_types == ("V", "IV", "III")
    main.run_command(machine, ":rings B B B")
    assert machine.ring_settings == "BBB"
    main.run_command(machine, ":ukw ukw-c")
    assert machine.reflector.name == "UKW-C"
    main.run_command(machine, ":initial")
    assert machine.rotor_types == ("I", "II", "III")
    assert machine.is_default
    assert main.run_command(machine, ":") == main.HELP


def test_render_state_groups_text(machine):
    for ch in "AAAAAAA":
        machine.encrypt_char(ch)
    panel = main.render_state(machine, main.Config())
    assert "Input        : AAAAA AA" in panel
    assert "Output       : BDZGO" in panel
