"""Tests for result export sinks."""

import subprocess
from pathlib import Path

import pytest

from scenefind import clipboard
from scenefind.clipboard import copy_to_clipboard, export_results, format_results
from scenefind.errors import ExportError
from scenefind.search import SearchParameters, SearchSession


@pytest.fixture
def found(world):
    session = SearchSession()
    return session.start([world], SearchParameters(("Transform",))).run()


class TestFormatResults:
    """Tests for the newline-joined export string."""

    def test_newline_joined_paths(self, found):
        assert format_results(found) == "\n".join([
            "/World",
            "/World/Player",
            "/World/Player/Weapon",
            "/World/Enemy",
            "/World/Enemy/Turret",
        ])

    def test_empty(self):
        assert format_results([]) == ""


class TestExportResults:
    """Tests for the text file sink."""

    def test_round_trip(self, found, tmp_path: Path):
        destination = tmp_path / "ComponentSearchResults.txt"
        written = export_results(found, destination)

        assert written == destination
        lines = destination.read_text(encoding="utf-8").splitlines()
        assert len(lines) == len(found)
        assert lines == [node.full_path for node in found]

    def test_utf8_names(self, tmp_path: Path):
        from conftest import make_node

        node = make_node("Käfer", "Rigidbody")
        destination = tmp_path / "out.txt"
        export_results([node], destination)
        assert destination.read_bytes() == "/Käfer\n".encode("utf-8")

    def test_failure_raises_export_error(self, found, tmp_path: Path):
        destination = tmp_path / "missing-dir" / "out.txt"
        with pytest.raises(ExportError) as excinfo:
            export_results(found, destination)

        assert excinfo.value.path == destination
        assert isinstance(excinfo.value.__cause__, OSError)
        # results are untouched by a failed export
        assert len(found) == 5


class TestCopyToClipboard:
    """Tests for the clipboard sink."""

    def test_first_available_command(self, monkeypatch):
        calls = []

        def fake_run(cmd, input, check, capture_output):
            calls.append((cmd, input))
            return subprocess.CompletedProcess(cmd, 0)

        monkeypatch.setattr(clipboard.subprocess, "run", fake_run)
        success, message = copy_to_clipboard("/World\n/World/Player")

        assert success is True
        assert message == "Search results copied to clipboard"
        assert calls == [(["xclip", "-selection", "clipboard"], b"/World\n/World/Player")]

    def test_falls_back_to_temp_file(self, monkeypatch):
        def missing(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])

        monkeypatch.setattr(clipboard.subprocess, "run", missing)
        success, message = copy_to_clipboard("/World")

        assert success is False
        assert message.startswith("Saved to ")
        saved = Path(message[len("Saved to "):])
        try:
            assert saved.read_text(encoding="utf-8") == "/World"
        finally:
            saved.unlink()
