"""
Statistics report format.

Reports are CSV with one value per row::

    scope,subject,metric,index,value
    aggregate,all,fitness_mean,,0.00012
    aggregate,all,convergence,0,812.5
    run,3,best_solution,1,420.96871

- ``scope``: ``aggregate`` or ``run``
- ``subject``: ``all`` for aggregates, the run index for runs
- ``index``: position inside a vector statistic, empty for scalars

Values are written with ``repr(float)`` by default, which round-trips
exactly, or in scientific notation with a fixed number of digits after the
decimal point when ``precision`` is set.
"""

import csv
import io
import logging
from collections.abc import Iterator
from typing import NamedTuple

import numpy as np

from evoswarm.exceptions import StatisticsError

from .sinks import ResultSink

logger = logging.getLogger(__name__)

HEADER = ("scope", "subject", "metric", "index", "value")


class Record(NamedTuple):
    scope: str
    subject: str
    metric: str
    index: int | None
    value: float | int


class StatisticsReporter:
    """
    Formats ``AggregateStatistics`` as report records.

    Args:
        precision: Digits after the decimal point in scientific notation;
            None writes lossless ``repr`` values.
        include_runs: Also write one block of records per run.
        include_convergence: Include the average convergence curve.
    """

    def __init__(self, precision: int | None = None, include_runs: bool = True, include_convergence: bool = True):
        if precision is not None and precision < 0:
            raise ValueError("precision cannot be negative")
        self.precision = precision
        self.include_runs = include_runs
        self.include_convergence = include_convergence

    def format_value(self, value: float) -> str:
        value = float(value)
        if self.precision is None:
            return repr(value)
        return f"{value:.{self.precision}e}"

    def records(self, statistics) -> Iterator[Record]:
        """Yield the aggregate records, then the per-run records."""
        yield Record("aggregate", "all", "run_count", None, statistics.run_count)
        yield Record("aggregate", "all", "failed_runs", None, len(statistics.failed_runs))

        if statistics.completed_runs:
            for metric, value in statistics.summary().items():
                if metric in ("run_count", "failed_runs") or value is None:
                    continue
                yield Record("aggregate", "all", metric, None, value)
            yield from self._vector("aggregate", "all", "solution_mean", statistics.solution_mean())
            yield from self._vector("aggregate", "all", "solution_std", statistics.solution_std())
            if self.include_convergence:
                yield from self._vector("aggregate", "all", "convergence", statistics.average_convergence())
        else:
            logger.warning("⚠️ No completed runs, only run counts are reported")

        if self.include_runs:
            for position, result in enumerate(statistics.results):
                subject = str(result.run_index if result.run_index is not None else position)
                yield Record("run", subject, "failed", None, int(result.failed))
                yield Record("run", subject, "best_fitness", None, result.best_fitness)
                yield Record("run", subject, "iterations", None, result.iterations)
                yield Record("run", subject, "evaluation_count", None, result.evaluation_count)
                yield Record("run", subject, "elapsed_seconds", None, result.elapsed_seconds)
                if result.seed is not None:
                    yield Record("run", subject, "seed", None, result.seed)
                if result.best_solution is not None:
                    yield from self._vector("run", subject, "best_solution", result.best_solution)

    @staticmethod
    def _vector(scope: str, subject: str, metric: str, values: np.ndarray) -> Iterator[Record]:
        for index, value in enumerate(values):
            yield Record(scope, subject, metric, index, value)

    def format_record(self, record: Record) -> str:
        buffer = io.StringIO()
        index = "" if record.index is None else str(record.index)
        if record.metric == "seed":
            value = str(int(record.value))
        else:
            value = self.format_value(record.value)
        csv.writer(buffer, lineterminator="\n").writerow((record.scope, record.subject, record.metric, index, value))
        return buffer.getvalue()

    def write(self, statistics, sink: ResultSink) -> int:
        """
        Write the full report through ``sink`` and close it.

        The sink is flushed and closed even when formatting or writing fails
        part-way; the error propagates.

        Returns:
            Number of records written.
        """
        count = 0
        with sink:
            sink.write(",".join(HEADER) + "\n")
            for record in self.records(statistics):
                sink.write(self.format_record(record))
                count += 1
        logger.info("📊 Wrote %d statistics records to %r", count, sink)
        return count

    def to_text(self, statistics) -> str:
        return ",".join(HEADER) + "\n" + "".join(self.format_record(r) for r in self.records(statistics))


def parse_records(text: str) -> list[Record]:
    """
    Parse a report produced by ``StatisticsReporter``.

    Raises:
        StatisticsError: If the header or a row is malformed.
    """
    reader = csv.reader(io.StringIO(text))
    try:
        header = next(reader)
    except StopIteration:
        raise StatisticsError("Empty statistics report") from None
    if tuple(header) != HEADER:
        raise StatisticsError(f"Unexpected report header: {header}")

    records = []
    for line_number, row in enumerate(reader, start=2):
        if not row:
            continue
        if len(row) != len(HEADER):
            raise StatisticsError(f"Line {line_number}: expected {len(HEADER)} fields, got {len(row)}")
        scope, subject, metric, index, value = row
        try:
            parsed = int(value) if metric == "seed" else float(value)
            records.append(Record(scope, subject, metric, int(index) if index else None, parsed))
        except ValueError as e:
            raise StatisticsError(f"Line {line_number}: {e}") from e
    return records
