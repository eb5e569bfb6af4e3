from __future__ import annotations

import asyncio
from typing import List, Optional, Protocol


class ProgressSink(Protocol):
    def append(self, line: str) -> None:
        ...


class NullSink:
    def append(self, line: str) -> None:
        return None


class ListSink:
    def __init__(self) -> None:
        self.lines: List[str] = []

    def append(self, line: str) -> None:
        self.lines.append(line)


class QueueSink:
    """
    Hands progress lines to a consumer running on the same event loop.
    close() pushes None so the consumer knows the run is over.
    """

    def __init__(self, queue: Optional["asyncio.Queue[Optional[str]]"] = None) -> None:
        self.queue: "asyncio.Queue[Optional[str]]" = queue if queue is not None else asyncio.Queue()

    def append(self, line: str) -> None:
        self.queue.put_nowait(line)

    def close(self) -> None:
        self.queue.put_nowait(None)
