from __future__ import annotations

import time

from loguru import logger

from .. import constants as cs
from .. import logs as ls
from ..config import InferenceConfig


class InferenceContext:
    def __init__(self, config: InferenceConfig | None = None) -> None:
        self.config = config or InferenceConfig()
        self.started_at = time.monotonic()
        self._deadline_reported = False

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.started_at) * cs.MS_PER_SECOND

    def deadline_passed(self) -> bool:
        if not self.config.max_time:
            return False
        elapsed = self.elapsed_ms()
        if elapsed <= self.config.max_time:
            return False
        if not self._deadline_reported:
            self._deadline_reported = True
            logger.warning(
                ls.RESOLVER_DEADLINE.format(
                    max_time=self.config.max_time, elapsed=elapsed
                )
            )
        return True

    def depth_exceeded(self, depth: int) -> bool:
        if depth <= self.config.max_depth:
            return False
        logger.debug(ls.RESOLVER_DEPTH_EXCEEDED.format(max_depth=self.config.max_depth))
        return True

    def budget_exceeded(self, depth: int) -> bool:
        return self.depth_exceeded(depth) or self.deadline_passed()
