from .csv_sink import CsvSink, resolve_separator

__all__ = ["CsvSink", "resolve_separator"]
