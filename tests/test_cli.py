"""Tests for the command-line interface."""
import io
import json

import pytest

from idletycoon.cli import build_parser, load_game, main


class _Tty(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def no_tty(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO())


def _run(save_file, *args, game="idletycoon.games.street_stand"):
    main(["--game", game, "--save-file", str(save_file), *args])


def _saved(save_file, key):
    return json.loads(json.loads(save_file.read_text(encoding="utf-8"))[key])


def test_parser_requires_item_for_buy():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["buy"])


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 0
    assert "idletycoon" in capsys.readouterr().out


def test_load_game():
    defn = load_game("idletycoon.games.street_stand")
    assert defn.config.name == "Street Stand Tycoon"


def test_load_game_without_define_game():
    with pytest.raises(SystemExit):
        load_game("idletycoon._types")


def test_info(capsys, tmp_path):
    _run(tmp_path / "save.json", "info")
    out = capsys.readouterr().out
    assert "cart" in out
    assert "first_cart" in out
    assert not (tmp_path / "save.json").exists()


def test_click_and_buy_persist(capsys, tmp_path, no_tty):
    save = tmp_path / "save.json"
    _run(save, "click", "-n", "6")
    assert _saved(save, "tycoon_save_v3")["money"] == 600

    _run(save, "buy", "cart")
    out = capsys.readouterr().out
    assert "Bought cart" in out
    assert "Open for Business" in out
    record = _saved(save, "tycoon_save_v3")
    assert record["money"] == 100
    assert record["items"][0] == {"id": "cart", "count": 1, "price": 750}


def test_buy_rejected(capsys, tmp_path, no_tty):
    with pytest.raises(SystemExit) as exc:
        _run(tmp_path / "save.json", "buy", "cart")
    assert exc.value.code == 1
    assert "Not enough money" in capsys.readouterr().out


def test_buy_unknown(capsys, tmp_path, no_tty):
    with pytest.raises(SystemExit):
        _run(tmp_path / "save.json", "buy", "rocket")
    assert "Unknown item" in capsys.readouterr().out


def test_wait(capsys, tmp_path, no_tty):
    save = tmp_path / "save.json"
    _run(save, "click", "-n", "5")
    _run(save, "buy", "cart")
    _run(save, "wait", "60")
    assert "+600" in capsys.readouterr().out
    assert _saved(save, "tycoon_save_v3")["money"] == 600


def test_status(capsys, tmp_path, no_tty):
    save = tmp_path / "save.json"
    _run(save, "status")
    out = capsys.readouterr().out
    assert "Street Stand Tycoon" in out
    assert "Money: 0" in out
    assert "lastSaveTime" in _saved(save, "tycoon_save_v3")


def test_name_command(capsys, tmp_path, no_tty):
    save = tmp_path / "save.json"
    _run(save, "name", "Big Burger", game="idletycoon.games.burger_shop")
    assert "Welcome to Big Burger!" in capsys.readouterr().out
    assert _saved(save, "tycoon_save_v4")["shopName"] == "Big Burger"

    with pytest.raises(SystemExit):
        _run(save, "name", "Other", game="idletycoon.games.burger_shop")


def test_unnamed_shop_hint(capsys, tmp_path, no_tty):
    save = tmp_path / "save.json"
    _run(save, "click", game="idletycoon.games.burger_shop")
    assert "Name your shop first" in capsys.readouterr().out
    assert not save.exists()


def test_prompt_for_name_on_tty(capsys, tmp_path, monkeypatch):
    monkeypatch.setattr("sys.stdin", _Tty())
    monkeypatch.setattr("builtins.input", lambda prompt: "")
    save = tmp_path / "save.json"
    _run(save, "click", game="idletycoon.games.burger_shop")
    assert "Welcome to Burger House!" in capsys.readouterr().out
    assert _saved(save, "tycoon_save_v4")["shopName"] == "Burger House"


def test_no_save_flag(tmp_path, no_tty):
    save = tmp_path / "save.json"
    main(["--game", "idletycoon.games.street_stand", "--save-file", str(save), "--no-save", "click"])
    assert not save.exists()


def test_run_briefly(capsys, tmp_path, no_tty):
    save = tmp_path / "save.json"
    _run(save, "run", "--seconds", "0.05")
    assert "Money: 0" in capsys.readouterr().out
    assert _saved(save, "tycoon_save_v3")["money"] == 0
