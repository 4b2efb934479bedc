"""Execution shapes for sets of units: concurrent aggregate and linear pipeline.

``run_all`` is non-fail-fast. Each unit is wrapped so that its failure (an
``Err`` or an unexpected exception) becomes a value; ``asyncio.gather`` then
never short-circuits, every unit runs to completion and reports its own
status, and only afterwards are outcomes reduced, in submission order, to the
first failure.

``run_each`` is the opposite: strictly sequential, and the first failure stops
the sequence. Release stages depend on each other (no release without a
published image), so they use this shape.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from orch.core.errors import AggregateFailure, UnitFailure
from orch.core.result import Err, Ok, Result
from orch.jobs.model import UnitOfWork
from orch.output.console import ConsoleProtocol, Style

__all__ = ["ParallelGroup", "settle"]


async def settle(unit: UnitOfWork) -> UnitFailure | None:
    """Run ``unit`` once and return its failure, or None on success."""
    try:
        result = await unit.run()
    except Exception as e:
        return UnitFailure(job=unit.name, reason=f"{type(e).__name__}: {e}")
    if isinstance(result, Err):
        return result.error
    return None


class ParallelGroup:
    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    async def run_all(self, units: Sequence[UnitOfWork]) -> Result[None, AggregateFailure]:
        """Run every unit concurrently, wait for all, then aggregate.

        Returns:
            Ok(None) if every unit succeeded, otherwise Err(AggregateFailure)
            whose ``first`` is the earliest-submitted failing unit.
        """
        if not units:
            return Ok(None)

        names = ", ".join(u.name for u in units)
        self._console.print(f"running {len(units)} job(s) concurrently: {names}", Style.DIM)

        # gather() keeps submission order regardless of completion order
        outcomes = await asyncio.gather(*(settle(u) for u in units))
        failures = tuple(f for f in outcomes if f is not None)

        for failure in failures:
            self._console.warning(failure.message)

        if failures:
            self._console.error(f"{len(failures)}/{len(units)} job(s) failed")
            return Err(AggregateFailure(first=failures[0], failures=failures))
        return Ok(None)

    async def run_each(self, units: Sequence[UnitOfWork]) -> Result[None, UnitFailure]:
        """Run units one after another; stop at the first failure."""
        for index, unit in enumerate(units):
            self._console.print(f"[{index + 1}/{len(units)}] {unit.name}", Style.DIM)
            failure = await settle(unit)
            if failure is not None:
                skipped = len(units) - index - 1
                if skipped:
                    self._console.warning(f"{failure.job} failed; skipping {skipped} remaining")
                return Err(failure)
        return Ok(None)
