"""
Summary: One-shot conflict negotiation between an apply run and a decision maker.
Why: Pause a run at a single point until the caller chooses overwrite or skip.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import Future, InvalidStateError
from enum import StrEnum
from typing import Callable

from msupack.platform.logging import logger

from ..domain.models import ApplyConflict, OverwriteMode


class ConflictResolution(StrEnum):
    """Answer to a negotiation. ``DECLINED`` means no decision was made."""

    OVERWRITE = "overwrite"
    SKIP = "skip"
    DECLINED = "declined"

    @staticmethod
    def from_overwrite_mode(mode: OverwriteMode) -> "ConflictResolution":
        if mode is OverwriteMode.OVERWRITE:
            return ConflictResolution.OVERWRITE
        if mode is OverwriteMode.SKIP:
            return ConflictResolution.SKIP
        return ConflictResolution.DECLINED

    def to_overwrite_mode(self) -> OverwriteMode | None:
        if self is ConflictResolution.OVERWRITE:
            return OverwriteMode.OVERWRITE
        if self is ConflictResolution.SKIP:
            return OverwriteMode.SKIP
        return None


class ConflictNegotiation:
    """Request/response handshake carrying the ordered conflict set.

    The first answer wins; later ``respond``/``decline`` calls return False.
    """

    def __init__(self, conflicts: Sequence[ApplyConflict]) -> None:
        self._conflicts: tuple[ApplyConflict, ...] = tuple(conflicts)
        self._future: Future[ConflictResolution] = Future()

    @property
    def conflicts(self) -> tuple[ApplyConflict, ...]:
        return self._conflicts

    @property
    def done(self) -> bool:
        return self._future.done()

    def respond(self, mode: OverwriteMode) -> bool:
        """Answer with ``OVERWRITE`` or ``SKIP``; ``ASK`` counts as declining."""

        return self._complete(ConflictResolution.from_overwrite_mode(mode))

    def decline(self) -> bool:
        """Close the negotiation without a decision."""

        return self._complete(ConflictResolution.DECLINED)

    def close(self) -> None:
        """Decline if still open; no-op once answered."""

        _ = self.decline()

    def wait(self, timeout: float | None = None) -> ConflictResolution:
        """Block the calling run until an answer arrives."""

        return self._future.result(timeout=timeout)

    def _complete(self, resolution: ConflictResolution) -> bool:
        try:
            self._future.set_result(resolution)
        except InvalidStateError:
            logger.debug(
                "Ignoring %s: conflict negotiation already resolved as %s",
                resolution,
                self._future.result(),
            )
            return False
        return True


ConflictResolver = Callable[[ConflictNegotiation], None]
"""Called with an open negotiation; must eventually respond, decline or close it."""


def fixed_resolver(mode: OverwriteMode) -> ConflictResolver:
    """Build a non-interactive resolver that always answers ``mode``."""

    def _resolve(negotiation: ConflictNegotiation) -> None:
        _ = negotiation.respond(mode)

    return _resolve


__all__ = [
    "ConflictNegotiation",
    "ConflictResolution",
    "ConflictResolver",
    "fixed_resolver",
]
