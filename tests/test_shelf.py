"""Tests for the command-line front end."""
import json

import psycopg2.pool

from booklist.config import Config
from shelf import build_parser, book_fields_from_args, display_books, setup_database


def test_list_defaults():
    args = build_parser().parse_args(["list"])

    assert args.query == ""
    assert args.filter == "all"
    assert args.sort == "titre"


def test_add_fields_from_args():
    args = build_parser().parse_args([
        "add", "--nom", "Dune", "--auteur", "Herbert", "--annee", "1965", "--lu", "--no-favorite",
    ])

    assert book_fields_from_args(args) == {
        "nom": "Dune", "auteur": "Herbert", "annee": "1965", "lu": True, "favorite": False,
    }


def test_edit_only_given_fields():
    args = build_parser().parse_args(["edit", "4", "--rating", "3"])

    assert args.id == "4"
    assert book_fields_from_args(args) == {"rating": 3}


def test_display_compact(capsys, books):
    display_books(books, "compact")

    assert capsys.readouterr().out.splitlines() == ["1. Dune - Herbert", "2. 1984 - Orwell"]


def test_display_json(capsys, books):
    display_books(books, "json")

    assert json.loads(capsys.readouterr().out)[1]["nom"] == "1984"


def test_display_table(capsys, books):
    display_books(books, "table")

    out = capsys.readouterr().out
    assert "Dune" in out
    assert "Non lu" in out


def test_setup_database_is_lazy(monkeypatch):
    """Test that opening the CLI store does not connect to PostgreSQL."""
    def refuse(*args, **kwargs):
        raise AssertionError("connected too early")

    monkeypatch.setattr(psycopg2.pool, "SimpleConnectionPool", refuse)

    db = setup_database(Config())

    assert db.connection_pool is None
