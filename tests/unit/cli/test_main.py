"""Tests for the docsrc CLI."""

import sys

import pytest
import respx

from docsrc.cli.commands import describe_path
from docsrc.cli.main import create_parser, main

from ..sources.conftest import mock_gitlab


def run_main(monkeypatch, *argv: str) -> int:
    monkeypatch.setattr(sys, "argv", ["docsrc", *argv])
    monkeypatch.delenv("DOCSRC_CONFIG", raising=False)
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


class TestParser:
    """Tests for argument parsing."""

    def test_fetch_arguments(self):
        args = create_parser().parse_args(
            ["fetch", "gitlab.com/acme/widgets", "--etag", "1-git-abc", "--timeout", "5"]
        )

        assert args.command == "fetch"
        assert args.path == "gitlab.com/acme/widgets"
        assert args.etag == "1-git-abc"
        assert args.timeout == 5.0

    def test_fetch_defaults(self):
        args = create_parser().parse_args(["fetch", "gitlab.com/acme/widgets"])

        assert args.etag == ""
        assert args.timeout is None
        assert args.verbose is False


class TestDescribePath:
    """Tests for check command classification."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("gitlab.com/acme/widgets", "valid remote"),
            ("fmt", "standard package"),
            ("net/http", "standard package"),
            ("archive", "standard directory"),
            ("not a path", "invalid"),
        ],
    )
    def test_classification(self, path, expected):
        assert describe_path(path) == expected


class TestMain:
    """Tests for the main entry point."""

    def test_check_prints_classification(self, monkeypatch, capsys):
        code = run_main(monkeypatch, "check", "gitlab.com/acme/widgets")

        assert code == 0
        assert "gitlab.com/acme/widgets: valid remote" in capsys.readouterr().out

    def test_no_command_prints_help(self, monkeypatch, capsys):
        code = run_main(monkeypatch)

        assert code == 0
        assert "usage: docsrc" in capsys.readouterr().out

    def test_invalid_path_exits_with_error(self, monkeypatch, capsys):
        code = run_main(monkeypatch, "fetch", "not a path")

        assert code == 1
        assert "Error: Import path not valid" in capsys.readouterr().err

    @respx.mock
    def test_fetch_prints_directory(self, monkeypatch, capsys):
        mock_gitlab(commit_id="abc123")

        code = run_main(monkeypatch, "fetch", "gitlab.com/acme/widgets/sub")

        out = capsys.readouterr().out
        assert code == 0
        assert "Etag: 1-git-abc123" in out
        assert "doc.go" in out
        assert "internal" in out

    @respx.mock
    def test_fetch_with_current_etag_not_modified(self, monkeypatch, capsys):
        mock_gitlab(commit_id="abc123")

        code = run_main(monkeypatch, "fetch", "gitlab.com/acme/widgets/sub", "--etag", "1-git-abc123")

        assert code == 0
        assert "Not modified since" in capsys.readouterr().out

    @respx.mock
    def test_project_prints_description(self, monkeypatch, capsys):
        mock_gitlab()

        code = run_main(monkeypatch, "project", "gitlab.com/acme/widgets")

        assert code == 0
        assert "Widgets for all" in capsys.readouterr().out
