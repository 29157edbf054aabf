"""Priority-ordered frontier propagation (guided fast marching)."""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from gdfmm.core.predictors import DepthPredictor
from gdfmm.core.speed import SpeedField
from gdfmm.errors import InputShapeError, InsufficientDataError

logger = logging.getLogger(__name__)

# (dx, dy) in the order neighbours are visited.
NEIGHBOURS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (-1, 0), (0, -1))

DEFAULT_MAX_DEFERRALS = 20


@dataclass
class RunStats:
    seeds: int = 0
    pops: int = 0
    filled: int = 0
    deferrals: int = 0


class PropagationEngine:
    """
    Fills unknown depth pixels outward from the known ones.

    The frontier is a max-priority queue of ``(priority, x, y)`` entries.
    Known input pixels are seeded at priority 0; a newly filled pixel enters
    with its :class:`SpeedField` priority. When a neighbour cannot be
    predicted yet, the popped pixel is re-queued at ``priority - 1`` so that
    other parts of the frontier can enrich the neighbour's window first.
    Equal priorities are served in insertion order.
    """

    def __init__(
        self,
        predictor: DepthPredictor,
        speed: SpeedField,
        max_deferrals: int = DEFAULT_MAX_DEFERRALS,
    ) -> None:
        self.predictor = predictor
        self.speed = speed
        self.max_deferrals = max_deferrals
        self.stats = RunStats()
        self._heap: List[Tuple[float, int, int, int]] = []
        self._counter = itertools.count()

    def _push(self, priority: float, x: int, y: int) -> None:
        # heapq is a min-heap; negate for max-priority, counter keeps FIFO ties.
        heapq.heappush(self._heap, (-priority, next(self._counter), x, y))

    def _pop(self) -> Tuple[float, int, int]:
        neg_priority, _, x, y = heapq.heappop(self._heap)
        return -neg_priority, x, y

    def run(self, depth: np.ndarray, color: np.ndarray) -> np.ndarray:
        """
        Propagate in place over ``depth`` (HxW float32, 0 = unknown) and return it.

        Pixels not 4-connected to any known pixel stay 0. Raises
        :class:`InsufficientDataError` if a frontier pixel exceeds the
        deferral budget.
        """
        if depth.shape != self.speed.shape:
            raise InputShapeError(
                f"Depth shape {depth.shape} does not match speed field {self.speed.shape}"
            )
        height, width = depth.shape
        self.stats = RunStats()
        self._heap = []
        self._counter = itertools.count()

        seed_ys, seed_xs = np.nonzero(depth)
        for x, y in zip(seed_xs.tolist(), seed_ys.tolist()):
            self._push(0.0, x, y)
        self.stats.seeds = len(self._heap)

        while self._heap:
            priority, x, y = self._pop()
            self.stats.pops += 1
            deferred = False

            for dx, dy in NEIGHBOURS:
                nx, ny = x + dx, y + dy
                if not (0 <= nx < width and 0 <= ny < height):
                    continue
                if depth[ny, nx] != 0:
                    continue

                value, ok = self.predictor.predict(depth, color, nx, ny)
                if ok and value != 0:
                    depth[ny, nx] = value
                    self.stats.filled += 1
                    self._push(self.speed(nx, ny), nx, ny)
                    continue

                if priority < -self.max_deferrals:
                    logger.debug(
                        "Deferral budget exhausted at (%d, %d), priority %.3f", x, y, priority
                    )
                    raise InsufficientDataError(position=(x, y), priority=priority)
                deferred = True

            if deferred:
                self.stats.deferrals += 1
                self._push(priority - 1.0, x, y)

        logger.debug(
            "Propagation finished: seeds=%d filled=%d pops=%d deferrals=%d",
            self.stats.seeds,
            self.stats.filled,
            self.stats.pops,
            self.stats.deferrals,
        )
        return depth
