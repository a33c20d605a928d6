import json
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from tabulate import tabulate

from procmon.consts.MonitorState import StopReason
from procmon.models.sample import Sample
from procmon.util.cal_utils import average


@dataclass
class MonitorResult:
    """
    Summary of a finished monitoring run.

    Statistics are computed over the samples that actually reached the output
    file; samples skipped by a paused write are only counted.
    """
    output_file: Path
    stop_reason: Optional[StopReason] = None
    samples_written: int = 0
    samples_skipped: int = 0
    duration_seconds: float = 0.0
    samples: List[Sample] = field(default_factory=list, repr=False)

    @property
    def peak_cpu_percent(self) -> int:
        return max((s.cpu_percent for s in self.samples), default=0)

    @property
    def avg_cpu_percent(self) -> float:
        return average([s.cpu_percent for s in self.samples])

    @property
    def peak_working_set_mb(self) -> int:
        return max((s.working_set_mb for s in self.samples), default=0)

    @property
    def peak_private_mb(self) -> int:
        return max((s.private_mb for s in self.samples), default=0)

    @property
    def peak_open_handles(self) -> int:
        return max((s.open_handles for s in self.samples), default=0)

    def record_written(self, sample: Sample) -> None:
        self.samples.append(sample)
        self.samples_written += 1

    def record_skipped(self) -> None:
        self.samples_skipped += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation (samples excluded)."""
        data = asdict(self)
        data.pop("samples")
        data["output_file"] = str(self.output_file)
        data["stop_reason"] = self.stop_reason.value if self.stop_reason else None
        data.update({
            "peak_cpu_percent": self.peak_cpu_percent,
            "avg_cpu_percent": self.avg_cpu_percent,
            "peak_working_set_mb": self.peak_working_set_mb,
            "peak_private_mb": self.peak_private_mb,
            "peak_open_handles": self.peak_open_handles,
        })
        return data

    def save_to_file(self, file_path: Path) -> None:
        """Save the summary as JSON."""
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)

    def format_table(self) -> str:
        rows = [
            ["Output file", str(self.output_file)],
            ["Stop reason", self.stop_reason.value if self.stop_reason else "-"],
            ["Duration (s)", f"{self.duration_seconds:.1f}"],
            ["Samples written", self.samples_written],
            ["Samples skipped", self.samples_skipped],
            ["CPU peak (%)", self.peak_cpu_percent],
            ["CPU avg (%)", f"{self.avg_cpu_percent:.1f}"],
            ["Physical memory peak (MB)", self.peak_working_set_mb],
            ["Private memory peak (MB)", self.peak_private_mb],
            ["Open handles peak", self.peak_open_handles],
        ]
        return tabulate(rows, headers=["Metric", "Value"], tablefmt="github", stralign="left", numalign="left")

    def print_summary(self) -> None:
        """Print formatted summary to console."""
        print("\n=== Summary ===")
        print(self.format_table())
