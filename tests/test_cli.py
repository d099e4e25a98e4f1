"""Tests for the kvline command-line tool."""

from __future__ import annotations

import io
import json
import sys
import tracemalloc
from pathlib import Path

import pytest

from kvline.cli import EXIT_OK, EXIT_SCAN_FAILED, EXIT_USAGE, main, run
from kvline.renderers import JsonRenderer, TemplateRenderer

LOG = "level=info msg=start\nplain text line\nlevel=warn msg=slow took=3s\n"


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    path = tmp_path / "app.log"
    path.write_text(LOG, encoding="utf-8")
    return path


class TestMain:
    def test_json_to_stdout(self, log_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-f", str(log_file)]) == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert [json.loads(line) for line in lines] == [
            {"level": "info", "msg": "start"},
            {"level": "warn", "msg": "slow", "took": "3s"},
        ]

    def test_template(self, log_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-f", str(log_file), "-t", "{level} {msg}"]) == EXIT_OK
        assert capsys.readouterr().out == "info start\nwarn slow\n"

    def test_keep_empty(self, log_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-f", str(log_file), "--keep-empty", "-t", "[{level}]"]) == EXIT_OK
        assert capsys.readouterr().out == "[info]\n[]\n[warn]\n"

    def test_output_file(self, log_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out.txt"
        assert main(["-f", str(log_file), "-o", str(out), "-t", "{msg}"]) == EXIT_OK
        assert out.read_text(encoding="utf-8") == "start\nslow\n"

    def test_threaded(self, log_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-f", str(log_file), "--threaded", "-t", "{msg}"]) == EXIT_OK
        assert capsys.readouterr().out == "start\nslow\n"

    def test_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"a=1\n")))
        assert main(["-t", "{a}"]) == EXIT_OK
        assert capsys.readouterr().out == "1\n"

    def test_encoding(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "latin.log"
        path.write_bytes("name=café\n".encode("latin-1"))
        assert main(["-f", str(path), "--encoding", "latin-1", "-t", "{name}"]) == EXIT_OK
        assert capsys.readouterr().out == "café\n"

    def test_unterminated_quote_fails(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "bad.log"
        path.write_text("a=1\nb='oops\n", encoding="utf-8")
        assert main(["-f", str(path), "-t", "{a}"]) == EXIT_SCAN_FAILED
        assert capsys.readouterr().out == "1\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        assert main(["-f", str(tmp_path / "nope.log")]) == EXIT_USAGE

    def test_bad_template(self, log_file: Path) -> None:
        assert main(["-f", str(log_file), "-t", "{"]) == EXIT_USAGE

    def test_profile_summary(self, log_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-f", str(log_file), "--profile"]) == EXIT_OK
        summary = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert summary["records"] == 3
        assert summary["bindings"] == 5

    def test_cpuprofile(self, log_file: Path, tmp_path: Path) -> None:
        stats = tmp_path / "cpu.prof"
        assert main(["-f", str(log_file), "--cpuprofile", str(stats)]) == EXIT_OK
        assert stats.stat().st_size > 0

    def test_memprofile(self, log_file: Path, tmp_path: Path) -> None:
        heap = tmp_path / "scan.heap"
        assert main(["-f", str(log_file), "--memprofile", str(heap)]) == EXIT_OK
        snapshot = tracemalloc.Snapshot.load(str(heap))
        assert isinstance(snapshot, tracemalloc.Snapshot)
        assert not tracemalloc.is_tracing()

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert capsys.readouterr().out.startswith("kvline ")


class TestRun:
    def test_render_failure_skips_record(self) -> None:
        out = io.StringIO()
        status = run(io.StringIO("a=1\na=x\n"), out, TemplateRenderer("{a:>3}{a.real}"))
        assert status == EXIT_OK
        assert out.getvalue() == ""

    def test_writes_one_line_per_record(self) -> None:
        out = io.StringIO()
        assert run(io.StringIO("a=1\nb=2\n"), out, JsonRenderer()) == EXIT_OK
        assert out.getvalue() == '{"a": "1"}\n{"b": "2"}\n'

    def test_flushes_each_record_before_reading_on(self) -> None:
        out = _FlushRecorder()

        class Lines(io.StringIO):
            def readline(self, size: int = -1) -> str:
                out.seen_at_read.append(out.visible)
                return super().readline(size)

        assert run(Lines("a=1\nb=2\n"), out, TemplateRenderer("{a}{b}")) == EXIT_OK
        # Each line's record is visible before the next line is read
        assert out.seen_at_read == ["", "1\n", "1\n2\n"]


class _FlushRecorder(io.StringIO):
    """Output whose content only becomes visible when flushed."""

    def __init__(self) -> None:
        super().__init__()
        self.visible = ""
        self.seen_at_read: list[str] = []

    def flush(self) -> None:
        super().flush()
        self.visible = self.getvalue()
