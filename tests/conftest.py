import os
import stat
from pathlib import Path
from typing import List

import pytest

from procmon.service.sink.csv_sink import CsvSink
from procmon.util.file_utils import clear_read_only
from tests.fakes import FakeClock


def read_lines(path: Path) -> List[str]:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read().splitlines()


def is_read_only(path: Path) -> bool:
    return not (os.stat(path).st_mode & stat.S_IWUSR)


def remove_sink_file(path: Path) -> None:
    clear_read_only(path)
    os.remove(path)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink(tmp_path) -> CsvSink:
    return CsvSink.create(tmp_path)
