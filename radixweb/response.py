"""HTTP response wrapper that tracks status, size and commit state."""

from __future__ import annotations

import logging
from typing import Callable, MutableMapping, Protocol

logger = logging.getLogger(__name__)

STATUS_OK = 200


class ResponseWriter(Protocol):
    """The interface a response writes through."""

    headers: MutableMapping[str, str]

    def write_header(self, code: int) -> None: ...

    def write(self, data: bytes) -> int: ...


class Response:
    """Wraps a response writer, running hooks before and after writing."""

    def __init__(self, writer: ResponseWriter) -> None:
        self.writer = writer
        self.status = 0
        self.size = 0
        self.committed = False
        self._before: list[Callable[[], None]] = []
        self._after: list[Callable[[], None]] = []

    @property
    def header(self) -> MutableMapping[str, str]:
        """Headers that will be sent by ``write_header``."""
        return self.writer.headers

    def before(self, fn: Callable[[], None]) -> None:
        """Register ``fn`` to run just before the header is written."""
        self._before.append(fn)

    def after(self, fn: Callable[[], None]) -> None:
        """Register ``fn`` to run just after each body write."""
        self._after.append(fn)

    def write_header(self, code: int) -> None:
        """Send the status code; ignored with a warning once committed."""
        if self.committed:
            logger.warning("response already committed")
            return
        self.status = code
        for fn in self._before:
            fn()
        self.writer.write_header(self.status)
        self.committed = True

    def write(self, data: bytes) -> int:
        """Write body data, sending the header first if needed."""
        if not self.committed:
            if self.status == 0:
                self.status = STATUS_OK
            self.write_header(self.status)
        written = self.writer.write(data)
        self.size += written
        for fn in self._after:
            fn()
        return written

    def flush(self) -> None:
        """Flush buffered data to the client."""
        flush = getattr(self.writer, "flush", None)
        if flush is None:
            raise TypeError("response writer does not support flushing")
        flush()

    def reset(self, writer: ResponseWriter) -> None:
        """Prepare the response for reuse with a new writer."""
        self._before = []
        self._after = []
        self.writer = writer
        self.size = 0
        self.status = STATUS_OK
        self.committed = False