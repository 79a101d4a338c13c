# ============================================================================
# LogTree - Sink Tests
#
# Purpose: Test stream sinks, file sinks and path canonicalization
# Dependencies: pytest, LogTree
# Usage: pytest tests/test_sinks.py -v
# ============================================================================

import os

import pytest

from LogTree.errors import ConfigurationError, SinkError
from LogTree.sinks import LocalFileSink, StreamKind, StreamSink, make_stream_sink, parse_stream, resolve_log_path


class TestStreamSink:
    def test_devnull_has_no_sink(self):
        assert make_stream_sink(StreamKind.DEVNULL) is None

    def test_stdout(self, capsys):
        make_stream_sink(StreamKind.STDOUT).write("to stdout")
        out, err = capsys.readouterr()
        assert out == "to stdout\n"
        assert err == ""

    def test_stderr_and_stdlog(self, capsys):
        make_stream_sink(StreamKind.STDERR).write("to stderr")
        make_stream_sink(StreamKind.STDLOG).write("to stdlog")
        out, err = capsys.readouterr()
        assert out == ""
        assert err == "to stderr\nto stdlog\n"

    def test_devnull_rejected_by_constructor(self):
        with pytest.raises(ValueError):
            StreamSink(StreamKind.DEVNULL)


class TestParseStream:
    def test_names(self):
        assert parse_stream("stderr") == StreamKind.STDERR
        assert parse_stream("DEVNULL") == StreamKind.DEVNULL

    def test_integers(self):
        assert parse_stream(1) == StreamKind.STDOUT
        assert parse_stream("3") == StreamKind.STDLOG

    def test_unknown(self):
        with pytest.raises(ConfigurationError):
            parse_stream("printer")


class TestResolveLogPath:
    def test_creates_missing_file(self, tmp_path):
        target = tmp_path / "new.log"
        resolved = resolve_log_path(str(target))
        assert target.exists()
        assert resolved == str(target.resolve())

    def test_existing_file_untouched(self, tmp_path):
        target = tmp_path / "old.log"
        target.write_text("keep\n")
        resolve_log_path(target)
        assert target.read_text() == "keep\n"

    def test_relative_path_is_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert resolve_log_path("rel.log") == str((tmp_path / "rel.log").resolve())

    def test_symlink_resolves_to_target(self, tmp_path):
        target = tmp_path / "real.log"
        target.write_text("")
        link = tmp_path / "link.log"
        os.symlink(target, link)
        assert resolve_log_path(link) == resolve_log_path(target)

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(SinkError):
            resolve_log_path(tmp_path / "nope" / "x.log")

    def test_nul_in_path_raises_sink_error(self):
        with pytest.raises(SinkError):
            resolve_log_path("bad\0name.log")


class TestLocalFileSink:
    def test_appends_and_flushes(self, tmp_path, read_lines):
        target = tmp_path / "a.log"
        target.write_text("existing\n")
        sink = LocalFileSink(target)
        sink.write("one")
        assert read_lines(target) == ["existing", "one"]
        sink.close()

    def test_close_is_idempotent(self, tmp_path):
        sink = LocalFileSink(tmp_path / "b.log")
        sink.close()
        sink.close()
        assert sink.closed

    def test_write_after_close_raises_sink_error(self, tmp_path):
        sink = LocalFileSink(tmp_path / "c.log")
        sink.close()
        with pytest.raises(SinkError):
            sink.write("late")

    def test_rejected_path_raises_sink_error(self):
        with pytest.raises(SinkError):
            LocalFileSink("bad\0name.log")
