import sys

import pytest

from cli.__main__ import main


def test_help_uses_program_name(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["fintrack", "--help"])

    with pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    assert out.startswith("usage: fintrack ")


def test_subcommand_help_uses_program_name(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["fintrack", "transactions", "log", "--help"])

    with pytest.raises(SystemExit):
        main()

    assert "usage: fintrack transactions log" in capsys.readouterr().out
