from __future__ import annotations

import json

from conftest import search_xml, thing_item, thing_xml


def test_init_db_and_stats(tmp_path, capsys):
    from bgg_search.cli import main

    db_path = tmp_path / "cli.db"
    log_file = str(tmp_path / "cli.log")

    assert main(["--db", str(db_path), "--log-file", log_file, "init-db"]) == 0
    assert db_path.exists()

    assert main(["--db", str(db_path), "--log-file", log_file, "stats"]) == 0
    assert "Total games in database: 0" in capsys.readouterr().out


def test_search_prints_json(fake_bgg, tmp_path, capsys):
    from bgg_search.cli import main

    fake_bgg.search_body = search_xml([(13, "Catan")])
    fake_bgg.thing_body = thing_xml(thing_item(13, "Catan", yearpublished=1995))

    code = main(["--db", str(tmp_path / "cli.db"), "--log-file", str(tmp_path / "cli.log"),
                 "search", "Catan", "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["games"][0]["name"] == "Catan"
    assert payload["games"][0]["localId"]


def test_search_failure_exit_code(fake_bgg, tmp_path, capsys):
    from bgg_search.cli import main

    fake_bgg.search_status = 503

    code = main(["--db", str(tmp_path / "cli.db"), "--log-file", str(tmp_path / "cli.log"),
                 "search", "Catan"])

    assert code == 1
    assert "503" in capsys.readouterr().out


def test_init_db_unwritable_path_exit_code(tmp_path, capsys):
    from bgg_search.cli import main

    not_a_dir = tmp_path / "occupied"
    not_a_dir.write_text("plain file")

    code = main(["--db", str(not_a_dir / "cli.db"), "--log-file", str(tmp_path / "cli.log"), "init-db"])

    assert code == 1
    assert capsys.readouterr().out.startswith("Error: Could not create database")
