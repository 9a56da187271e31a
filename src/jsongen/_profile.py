"""
Opt-in hot-path profiling for the generator.

Set JSONGEN_PROFILE in the environment before import to collect per-function
call counts, elapsed time and bytes processed. Disabled, every hook is a no-op.
"""

import os
import time
from dataclasses import dataclass
from typing import Any

# Read once at import; hooks are chosen below and never re-checked
PROFILE_HOT_PATHS = __debug__ and "JSONGEN_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Accumulated timings for one instrumented function."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_processed: int = 0

    def record_call(self, duration_ns: int, size: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_processed += size

    @property
    def mean_time_ns(self) -> float:
        """Average duration per call, 0.0 before the first call."""
        if not self.call_count:
            return 0.0
        return self.total_time_ns / self.call_count


_hot_path_stats: dict[str, HotPathStats] = {}


if PROFILE_HOT_PATHS:

    class ProfileContext:
        """Times the enclosed block and charges it to func_name."""

        __slots__ = ("func_name", "size", "_started")

        def __init__(self, func_name: str, size: int = 0) -> None:
            self.func_name = func_name
            self.size = size
            self._started = 0

        def __enter__(self) -> "ProfileContext":
            self._started = time.perf_counter_ns()
            return self

        def __exit__(self, *exc_info: Any) -> None:
            elapsed = time.perf_counter_ns() - self._started
            stats = _hot_path_stats.get(self.func_name)
            if stats is None:
                stats = _hot_path_stats[self.func_name] = HotPathStats(
                    self.func_name
                )
            stats.record_call(elapsed, self.size)

else:

    class ProfileContext:  # type: ignore[no-redef]
        __slots__ = ()

        def __init__(self, func_name: str, size: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, *exc_info: Any) -> None:
            pass


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a snapshot of the statistics, empty unless profiling is on."""
    return dict(_hot_path_stats)


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()


__all__ = [
    "PROFILE_HOT_PATHS",
    "HotPathStats",
    "ProfileContext",
    "clear_hot_path_stats",
    "get_hot_path_stats",
]
