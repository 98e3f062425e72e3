"""Tiered resolution: try strategies in order, the last one never fails.

Each strategy exposes ``attempt(payload)`` and reports failure by raising a
:class:`~study_planner.errors.PlannerError`. The resolver logs the failure,
counts it and moves on to the next tier. The final strategy is the
guaranteed-total fallback and is called without a safety net.
"""
from __future__ import annotations

import logging
from typing import Generic, Protocol, Sequence, TypeVar

from study_planner.errors import PlannerError
from study_planner.metrics import RESOLUTIONS_TOTAL, RESOLUTION_FAILURES_TOTAL

logger = logging.getLogger(__name__)

In = TypeVar("In", contravariant=True)
Out = TypeVar("Out", covariant=True)
T = TypeVar("T")
R = TypeVar("R")


class ResolutionStrategy(Protocol[In, Out]):
    name: str

    def attempt(self, payload: In) -> Out:
        ...


class TieredResolver(Generic[T, R]):
    def __init__(self, name: str, strategies: Sequence[ResolutionStrategy[T, R]]):
        if not strategies:
            raise ValueError("TieredResolver needs at least one strategy")
        self.name = name
        self.strategies = list(strategies)

    def resolve(self, payload: T) -> R:
        *tiers, last_resort = self.strategies

        for strategy in tiers:
            try:
                result = strategy.attempt(payload)
            except PlannerError as e:
                logger.warning(
                    f"[{self.name}] strategy '{strategy.name}' failed ({e.reason}): {e}"
                )
                self._count_failure(strategy.name, e.reason)
                continue
            except Exception:
                logger.exception(
                    f"[{self.name}] strategy '{strategy.name}' raised unexpectedly"
                )
                self._count_failure(strategy.name, "unexpected")
                continue

            self._count_success(strategy.name)
            return result

        result = last_resort.attempt(payload)
        self._count_success(last_resort.name)
        return result

    def _count_success(self, strategy: str) -> None:
        try:
            RESOLUTIONS_TOTAL.labels(resolver=self.name, strategy=strategy).inc()
        except Exception:
            pass

    def _count_failure(self, strategy: str, reason: str) -> None:
        try:
            RESOLUTION_FAILURES_TOTAL.labels(
                resolver=self.name, strategy=strategy, reason=reason
            ).inc()
        except Exception:
            pass
