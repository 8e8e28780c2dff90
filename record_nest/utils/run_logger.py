"""Structured logging for nesting runs.

Every step line carries the same fields:
- source
- run_id
- step
- row_count
- duration_ms
"""

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class RunLogContext:
    """Context for one structured run log line."""

    source: str
    run_id: str
    step: str = ""
    row_count: int = 0
    duration_ms: Optional[float] = None
    status: str = "started"
    error: Optional[str] = None
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        data = asdict(self)
        data["timestamp"] = datetime.now(timezone.utc).isoformat()
        # Remove None values
        return {k: v for k, v in data.items() if v is not None}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class RunLogger:
    """Structured logger for the steps of a nesting run."""

    def __init__(self, source: str, run_id: str):
        """Initialize run logger.

        Args:
            source: Input name (usually the input file path)
            run_id: Unique run identifier
        """
        self.source = source
        self.run_id = run_id
        self.logger = logging.getLogger("record_nest.run")
        self._start_time: Optional[float] = None

    def _log(self, level: int, step: str, **kwargs) -> None:
        ctx = RunLogContext(source=self.source, run_id=self.run_id, step=step, **kwargs)
        payload = ctx.to_dict()
        # `extra` would clash with logging's own keyword
        payload["details"] = payload.pop("extra", {})
        self.logger.log(level, ctx.to_json(), extra=payload)

    def _elapsed_ms(self) -> Optional[float]:
        if self._start_time is None:
            return None
        return (time.time() - self._start_time) * 1000

    def start(self, step: str) -> None:
        """Log step start."""
        self._start_time = time.time()
        self._log(logging.INFO, step, status="started")

    def success(self, step: str, **kwargs) -> None:
        """Log step success."""
        self._log(logging.INFO, step, status="success", duration_ms=self._elapsed_ms(), **kwargs)

    def error(self, step: str, error: Exception, **kwargs) -> None:
        """Log step error."""
        self._log(
            logging.ERROR,
            step,
            status="error",
            error=str(error),
            duration_ms=self._elapsed_ms(),
            **kwargs,
        )

    def log_nest(
        self,
        input_count: int,
        root_count: int,
        node_count: int,
        dropped_count: int,
        duration_ms: float,
    ) -> None:
        """Log the nesting step."""
        self._log(
            logging.INFO,
            step="nest",
            status="success",
            row_count=node_count,
            duration_ms=duration_ms,
            extra={
                "input_count": input_count,
                "root_count": root_count,
                "dropped_count": dropped_count,
            },
        )


class Timer:
    """Elapsed time holder yielded by timed_operation."""

    def __init__(self):
        self.start_time = time.time()
        self.end_time: Optional[float] = None
        self.duration_ms: float = 0


@contextmanager
def timed_operation(name: str, logger: logging.Logger = None):
    """Context manager to time an operation.

    Usage:
        with timed_operation("nest") as timer:
            forest = nest(records)
        print(f"Took {timer.duration_ms}ms")
    """
    timer = Timer()

    try:
        yield timer
    finally:
        timer.end_time = time.time()
        timer.duration_ms = (timer.end_time - timer.start_time) * 1000

        if logger:
            logger.debug(
                f"Operation '{name}' completed",
                extra={"operation": name, "duration_ms": timer.duration_ms},
            )
