"""
tests/test_cli.py

Argument parsing and the error paths that never open a browser.
"""
import io

import pytest

from shop_automation.main import build_parser, main, read_product_names


class TestParser:
    def test_scrape_defaults(self) -> None:
        args = build_parser().parse_args(["scrape"])
        assert args.db_path == "../config/db"
        assert args.visible is False

    def test_login_flags(self) -> None:
        args = build_parser().parse_args(["login", "-v", "--manual"])
        assert args.visible and args.manual

    def test_shop_requires_list(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["shop"])
        args = build_parser().parse_args(["shop", "-", "--force-login"])
        assert args.shopping_list == "-"
        assert args.force_login is True

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    def test_product_names_from_lines(self) -> None:
        assert read_product_names(io.StringIO("Milk\n\n  Eggs  \n")) == ["Milk", "Eggs"]

    def test_scrape_without_names_exits_cleanly(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("\n\n"))
        assert main(["scrape"]) == 0
        assert "No products provided" in capsys.readouterr().err

    def test_shop_with_missing_list_fails(self, tmp_path) -> None:
        assert main(["shop", str(tmp_path / "missing.yml")]) == 1
