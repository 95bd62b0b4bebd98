import io

from codeagent.console import clear_screen, welcome


def test_clear_screen_writes_escape_sequence():
    out = io.StringIO()
    clear_screen(out)
    assert out.getvalue() == "\x1b[2J\x1b[0f"


def test_clear_screen_defaults_to_stdout(capsys):
    clear_screen()
    assert capsys.readouterr().out == "\x1b[2J\x1b[0f"


def test_welcome_message():
    out = io.StringIO()
    welcome("Ada", out)
    assert out.getvalue() == "Welcome  Ada\nWhat would you like to do today?\n"


def test_welcome_defaults_to_stdout(capsys):
    welcome("Grace")
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].endswith("Grace")
    assert lines[1] == "What would you like to do today?"