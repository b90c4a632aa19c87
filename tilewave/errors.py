"""Errors raised by the generation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tilewave.types import Coordinate


class GenerationFailure(Exception):
    """Raised when map generation reaches an unsolvable state.

    This occurs when a collapse finds no tile with positive probability, or
    when constraint propagation eliminates every possible tile of a node.
    There is no backtracking: the run is over and the caller decides whether
    to regenerate from scratch (usually with a different seed).

    Attributes:
        coordinate: Coordinate of the node the failure was detected at, if
            the failure can be attributed to a single node.
    """

    def __init__(self, message: str, coordinate: Coordinate | None = None) -> None:
        super().__init__(message)
        self.coordinate = coordinate
