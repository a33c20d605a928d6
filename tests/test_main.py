import json
import logging
import sys

import pytest

import procmon.__main__ as entry
from procmon.__main__ import EXIT_OK, main
from procmon.consts.MonitorState import StopReason
from procmon.service.heartbeat.heartbeat import Heartbeat

from tests.fakes import FakeHandle


@pytest.fixture
def no_launch(monkeypatch):
    """Run main() without touching real processes or the global log setup."""
    monkeypatch.setattr(entry, "terminate_existing", lambda name, settle_delay: 0)
    monkeypatch.setattr(entry, "launch", lambda exe, args, launch_delay: FakeHandle())
    monkeypatch.setattr(entry, "configure_logging", lambda level, log_file: None)


def run_args(tmp_path, *extra):
    return ["--exe", sys.executable, "--interval", "1", "--output-dir", str(tmp_path), *extra]


def test_interrupt_is_logged_and_reraised(tmp_path, no_launch, monkeypatch, caplog):
    def interrupted(self):
        raise KeyboardInterrupt

    monkeypatch.setattr(Heartbeat, "run", interrupted)
    main_logger = logging.getLogger("procmon.main")
    main_logger.addHandler(caplog.handler)
    try:
        with pytest.raises(KeyboardInterrupt):
            main(run_args(tmp_path))
    finally:
        main_logger.removeHandler(caplog.handler)

    [record] = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert "Interrupted" in record.getMessage()
    assert "PerfLog_" in record.getMessage()


def test_summary_is_written_as_json(tmp_path, no_launch, monkeypatch):
    def finished(self):
        self.result.stop_reason = StopReason.PROCESS_EXITED
        return self.result

    monkeypatch.setattr(Heartbeat, "run", finished)
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    summary = tmp_path / "summary.json"

    assert main(run_args(out_dir, "--summary", str(summary))) == EXIT_OK

    data = json.loads(summary.read_text(encoding="utf-8"))
    assert data["stop_reason"] == "process_exited"
    assert data["output_file"].startswith(str(out_dir))


def test_main_logger_is_under_package_root():
    assert entry.logger.name.startswith("procmon.")
