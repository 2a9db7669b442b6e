"""Incremental Server-Sent-Events decoding.

The API uses two framings:

* watch streams (``/v1/invoices/{id}/events``, ``/v1/payments/{id}/events``)
  send an ``event:`` line followed by a ``data:`` line, then a blank line;
* the wallet stream (``/v1/events``) sends bare ``data:`` lines, each one a
  complete event.

:class:`SSEDecoder` handles both. It accepts network chunks with arbitrary
boundaries and only emits a frame once its terminating newline has arrived.
"""

from __future__ import annotations

import codecs
import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServerSentEvent:
    """One parsed frame: the raw ``data:`` payload and its ``event:`` label."""

    data: str
    event: str = ""


class SSEDecoder:
    """Turns a chunked byte stream into :class:`ServerSentEvent` frames.

    With *paired* set, a ``data:`` line is only emitted when an ``event:``
    line came before it; the label is consumed by that data line. Without it
    every non-empty ``data:`` line is a frame and ``event:`` lines are ignored.
    """

    def __init__(self, *, paired: bool) -> None:
        self._paired = paired
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._pending = ""

    @property
    def pending_event(self) -> str:
        return self._pending

    def feed(self, chunk: bytes) -> list[ServerSentEvent]:
        """Add *chunk* to the buffer and return every frame it completed."""
        self._buffer += self._decoder.decode(chunk)
        frames: list[ServerSentEvent] = []
        while True:
            pos = self._buffer.find("\n")
            if pos < 0:
                break
            line = self._buffer[:pos]
            self._buffer = self._buffer[pos + 1 :]
            frame = self._process_line(line)
            if frame is not None:
                frames.append(frame)
        return frames

    def close(self) -> None:
        """Finish the stream. An unterminated last line is dropped."""
        self._buffer += self._decoder.decode(b"", final=True)
        if self._buffer:
            logger.debug("discarding %d bytes of unterminated SSE line", len(self._buffer))
        self._buffer = ""
        self._pending = ""

    def _process_line(self, line: str) -> ServerSentEvent | None:
        if line.startswith("event:"):
            if self._paired:
                self._pending = line[6:].strip()
            return None
        if not line.startswith("data:"):
            # blank separators, ":" comments and fields we don't use
            return None

        payload = line[5:].strip()
        if not payload:
            return None
        if not self._paired:
            return ServerSentEvent(data=payload)
        if not self._pending:
            logger.debug("dropping SSE data line with no preceding event label")
            return None
        frame = ServerSentEvent(data=payload, event=self._pending)
        self._pending = ""
        return frame


def iter_frames(chunks: Iterable[bytes], *, paired: bool) -> Iterator[ServerSentEvent]:
    decoder = SSEDecoder(paired=paired)
    for chunk in chunks:
        yield from decoder.feed(chunk)
    decoder.close()


async def aiter_frames(chunks: AsyncIterable[bytes], *, paired: bool) -> AsyncIterator[ServerSentEvent]:
    decoder = SSEDecoder(paired=paired)
    async for chunk in chunks:
        for frame in decoder.feed(chunk):
            yield frame
    decoder.close()
