from datetime import datetime, timezone
import json
from pathlib import Path

from procmon.consts.MonitorState import StopReason
from procmon.models.monitor_result import MonitorResult
from procmon.models.sample import AggregateMetrics, Sample

T0 = datetime(2024, 1, 1, 0, 0, 5, tzinfo=timezone.utc)


def test_sample_row_format():
    sample = Sample.build(T0, 3, AggregateMetrics(working_set_mb=45, private_mb=30, open_handles=112, instance_count=2))
    assert sample.to_row() == ["2024-01-01T00:00:05Z", "3", "45", "30", "112"]


def test_empty_result_has_zero_statistics():
    result = MonitorResult(output_file=Path("PerfLog.csv"))
    assert result.peak_cpu_percent == 0
    assert result.avg_cpu_percent == 0.0
    assert result.peak_open_handles == 0


def test_statistics_and_dict():
    result = MonitorResult(output_file=Path("PerfLog.csv"), stop_reason=StopReason.PROCESS_EXITED)
    result.record_written(Sample(T0, 10, 40, 20, 100))
    result.record_written(Sample(T0, 50, 60, 10, 90))
    result.record_skipped()

    data = result.to_dict()
    assert data["samples_written"] == 2
    assert data["samples_skipped"] == 1
    assert data["stop_reason"] == "process_exited"
    assert data["peak_cpu_percent"] == 50
    assert data["avg_cpu_percent"] == 30
    assert data["peak_working_set_mb"] == 60
    assert data["peak_private_mb"] == 20
    assert data["peak_open_handles"] == 100
    assert "samples" not in data


def test_summary_table(capsys):
    result = MonitorResult(output_file=Path("PerfLog.csv"), stop_reason=StopReason.SINK_MISSING)
    result.print_summary()
    out = capsys.readouterr().out
    assert "=== Summary ===" in out
    assert "sink_missing" in out
    assert "Samples written" in out


def test_save_to_file_writes_json_summary(tmp_path):
    result = MonitorResult(output_file=Path("PerfLog.csv"), stop_reason=StopReason.PROCESS_EXITED,
                           duration_seconds=2.0)
    result.record_written(Sample(T0, 7, 40, 20, 100))

    target = tmp_path / "summary.json"
    result.save_to_file(target)

    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["samples_written"] == 1
    assert data["stop_reason"] == "process_exited"
    assert data["peak_cpu_percent"] == 7
    assert data["output_file"] == "PerfLog.csv"
