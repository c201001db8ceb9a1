"""Nested stopwatches that log their start and end as JSON messages."""

from __future__ import annotations

import itertools
import logging
import threading
import time
import weakref

__all__ = ["HierarchicalStopwatch", "hierarchical_stopwatch"]


class HierarchicalStopwatch:
    """A stopwatch that nests inside whichever stopwatch is currently running.

    Starting logs a ``stopwatch_start`` message; stopping logs a
    ``stopwatch_end`` message with the duration in milliseconds and makes the
    parent the current stopwatch again.
    """

    default_logger: logging.Logger = logging.getLogger("balsa")
    _lock = threading.Lock()
    _current: weakref.ReferenceType[HierarchicalStopwatch] | None = None
    _ids = itertools.count()

    def __init__(
        self,
        name: str,
        logger: logging.Logger | None = None,
        level: int = logging.INFO,
    ) -> None:
        cls = HierarchicalStopwatch
        with cls._lock:
            self.id: int = next(cls._ids)
            self.parent: HierarchicalStopwatch | None = (
                cls._current() if cls._current is not None else None
            )
            cls._current = weakref.ref(self)

        self.name = name
        self.hierarchical_name = ":".join(self.hierarchy_names())
        if logger is not None:
            self.logger = logger
        elif self.parent is not None:
            self.logger = self.parent.logger
        else:
            self.logger = cls.default_logger
        self.level = level
        self.duration_ms: float | None = None
        self._start = time.perf_counter()

        parents = self.parent_ids()
        parent_json = "[]"
        if parents:
            parent_json = '["' + '","'.join(str(p) for p in parents) + '"]'
        self.logger.log(
            self.level,
            '{"type":"stopwatch_start", "name":"%s", "id": %d, "id_hierarchy": %s}',
            self.name,
            self.id,
            parent_json,
        )

    def _chain(self):
        node: HierarchicalStopwatch | None = self
        chain = []
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain

    def hierarchy_names(self) -> list[str]:
        """Names from the outermost stopwatch down to this one."""
        return [sw.name for sw in self._chain()]

    def hierarchy_ids(self) -> list[int]:
        """Ids from the outermost stopwatch down to this one."""
        return [sw.id for sw in self._chain()]

    def parent_ids(self) -> list[int]:
        """Ids of the enclosing stopwatches, outermost first."""
        return self.parent.hierarchy_ids() if self.parent is not None else []

    @property
    def stopped(self) -> bool:
        return self.duration_ms is not None

    def stop(self) -> float:
        """Stop timing, log the end message and return the duration in ms."""
        if self.duration_ms is not None:
            return self.duration_ms
        self.duration_ms = (time.perf_counter() - self._start) * 1000.0
        self.logger.log(
            self.level,
            '{"type":"stopwatch_end", "name":"%s", "id":%d,"duration":%s}',
            self.name,
            self.id,
            f"{self.duration_ms:5}",
        )
        cls = HierarchicalStopwatch
        with cls._lock:
            cls._current = weakref.ref(self.parent) if self.parent is not None else None
        return self.duration_ms

    def __enter__(self) -> HierarchicalStopwatch:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def hierarchical_stopwatch(
    name: str, logger: logging.Logger | None = None, level: int = logging.INFO
) -> HierarchicalStopwatch:
    """Start a new stopwatch nested in the current one."""
    return HierarchicalStopwatch(name, logger, level)