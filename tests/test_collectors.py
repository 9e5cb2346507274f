"""Tests for the netstat and file snapshot collectors."""

import asyncio
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from collectors.netstat_collector import FileCollector, NetstatCollector
from errors import (
    NetstatDecodeError,
    NetstatExecError,
    NetstatFailedError,
    NetstatTimeoutError,
    SnapshotDecodeError,
    SnapshotFileError,
)
from routing_table import load_routing_table


FIXTURE_PATH = Path(__file__).parent / "fixtures" / "sample-table.txt"


def run(coro):
    return asyncio.run(coro)


def fake_netstat(script: str, timeout: float = 10.0) -> NetstatCollector:
    """Stand in for netstat with a short Python program."""
    return NetstatCollector(path=sys.executable, args=["-c", script], timeout=timeout)


class TestNetstatCollector:

    def test_defaults(self):
        collector = NetstatCollector()
        assert collector.path == "/usr/sbin/netstat"
        assert collector.args == ["-rn"]

    def test_captures_stdout(self):
        script = f"import sys; sys.stdout.write(open({str(FIXTURE_PATH)!r}).read())"
        output = run(fake_netstat(script).get_snapshot())
        assert output == FIXTURE_PATH.read_text()

    def test_load_routing_table(self):
        script = f"import sys; sys.stdout.write(open({str(FIXTURE_PATH)!r}).read())"
        table = run(load_routing_table(fake_netstat(script)))
        assert len(table) == 25

    def test_nonzero_exit(self):
        with pytest.raises(NetstatFailedError) as exc:
            run(fake_netstat("import sys; sys.stderr.write('boom'); sys.exit(3)").get_snapshot())
        assert exc.value.returncode == 3
        assert "boom" in exc.value.stderr

    def test_missing_executable(self, tmp_path: Path):
        collector = NetstatCollector(path=str(tmp_path / "no-such-netstat"))
        with pytest.raises(NetstatExecError) as exc:
            run(collector.get_snapshot())
        assert isinstance(exc.value.cause, OSError)

    def test_non_utf8_output(self):
        with pytest.raises(NetstatDecodeError):
            run(fake_netstat("import sys; sys.stdout.buffer.write(bytes([0xa0, 0xa1]))").get_snapshot())

    def test_timeout(self):
        with pytest.raises(NetstatTimeoutError):
            run(fake_netstat("import time; time.sleep(10)", timeout=0.5).get_snapshot())


class TestFileCollector:

    def test_reads_snapshot(self):
        collector = FileCollector(FIXTURE_PATH)
        assert collector.name() == "file:sample-table.txt"
        assert run(collector.get_snapshot()) == FIXTURE_PATH.read_text()

    def test_load_routing_table(self):
        table = run(load_routing_table(FileCollector(FIXTURE_PATH)))
        assert table.find_route("1.1.1.1").interface == "en0"

    def test_missing_file(self, tmp_path: Path):
        path = tmp_path / "gone.txt"
        with pytest.raises(SnapshotFileError) as exc:
            run(FileCollector(path).get_snapshot())
        assert exc.value.path == str(path)
        assert isinstance(exc.value.cause, FileNotFoundError)

    def test_non_utf8_file(self, tmp_path: Path):
        path = tmp_path / "table.txt"
        path.write_bytes(b"Internet:\n\xa0\xa1\n")
        with pytest.raises(SnapshotDecodeError) as exc:
            run(FileCollector(path).get_snapshot())
        assert isinstance(exc.value.cause, UnicodeDecodeError)
