"""
Result sinks: destinations for formatted statistics reports.

A sink accepts text blocks through ``write``. Used as a context manager it
is flushed and closed on every exit path, including an exception raised in
the middle of a report. Any I/O failure is raised as ``SinkFailure`` with the
original error chained; nothing is swallowed.

Usage:
```python
with FileSink("results/stats.csv") as sink:
    StatisticsReporter().write(statistics, sink)
```
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TextIO

from evoswarm.exceptions import SinkFailure

logger = logging.getLogger(__name__)


class ResultSink(ABC):
    """Base class for report destinations."""

    def __init__(self):
        self.closed = False

    def write(self, text: str) -> None:
        if self.closed:
            raise SinkFailure(f"Cannot write to closed sink {self!r}")
        try:
            self._write(text)
        except OSError as e:
            raise SinkFailure(f"Write to {self!r} failed: {e}") from e

    def flush(self) -> None:
        if self.closed:
            return
        try:
            self._flush()
        except OSError as e:
            raise SinkFailure(f"Flush of {self!r} failed: {e}") from e

    def close(self) -> None:
        """Flush and release the destination. Closing twice is a no-op."""
        if self.closed:
            return
        try:
            self._flush()
            self._close()
        except OSError as e:
            raise SinkFailure(f"Close of {self!r} failed: {e}") from e
        finally:
            self.closed = True

    @abstractmethod
    def _write(self, text: str) -> None:
        pass

    def _flush(self) -> None:
        pass

    def _close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False


class StreamSink(ResultSink):
    """
    Sink over an already open text stream.

    The stream is closed with the sink only when ``close_stream`` is True, so
    ``StreamSink(sys.stdout)`` leaves stdout open.
    """

    def __init__(self, stream: TextIO, close_stream: bool = False):
        super().__init__()
        self.stream = stream
        self.close_stream = close_stream

    def _write(self, text: str) -> None:
        self.stream.write(text)

    def _flush(self) -> None:
        self.stream.flush()

    def _close(self) -> None:
        if self.close_stream:
            self.stream.close()

    def __repr__(self) -> str:
        return f"StreamSink({getattr(self.stream, 'name', type(self.stream).__name__)!r})"


class FileSink(ResultSink):
    """Sink writing to a file; the file is opened on first write, parent directories created."""

    def __init__(self, path: str | Path, mode: str = "w", encoding: str = "utf-8"):
        super().__init__()
        self.path = Path(path)
        self.mode = mode
        self.encoding = encoding
        self._file: TextIO | None = None

    def _write(self, text: str) -> None:
        if self._file is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, self.mode, encoding=self.encoding)
            logger.debug("📝 Writing results to %s", self.path)
        self._file.write(text)

    def _flush(self) -> None:
        if self._file is not None:
            self._file.flush()

    def _close(self) -> None:
        if self._file is not None:
            self._file.close()
            logger.info("💾 Results saved to %s", self.path)

    def __repr__(self) -> str:
        return f"FileSink({str(self.path)!r})"


class MemorySink(ResultSink):
    """Sink collecting text in memory; the content survives ``close``."""

    def __init__(self):
        super().__init__()
        self._blocks: list[str] = []
        self.flush_count = 0

    def _write(self, text: str) -> None:
        self._blocks.append(text)

    def _flush(self) -> None:
        self.flush_count += 1

    def getvalue(self) -> str:
        return "".join(self._blocks)

    def __repr__(self) -> str:
        return f"MemorySink(blocks={len(self._blocks)})"


class LoggingSink(ResultSink):
    """Sink forwarding every non-empty line to a ``logging.Logger``."""

    def __init__(self, target: logging.Logger | None = None, level: int = logging.INFO):
        super().__init__()
        self.target = target or logger
        self.level = level

    def _write(self, text: str) -> None:
        for line in text.splitlines():
            if line:
                self.target.log(self.level, line)

    def __repr__(self) -> str:
        return f"LoggingSink({self.target.name!r})"
