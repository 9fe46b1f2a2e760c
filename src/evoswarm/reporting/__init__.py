"""Result sinks and the statistics report format."""

from .report import HEADER, Record, StatisticsReporter, parse_records
from .sinks import FileSink, LoggingSink, MemorySink, ResultSink, StreamSink

__all__ = [
    "HEADER",
    "Record",
    "StatisticsReporter",
    "parse_records",
    "FileSink",
    "LoggingSink",
    "MemorySink",
    "ResultSink",
    "StreamSink",
]
