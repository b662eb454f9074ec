"""
Layout tags used to select array implementations at runtime.

An array is either a flat 1-D leaf or a general strided N-D view. The tag is
derived from the array header and used as the dispatch state of the
control-path manager (see ``stridearray.infrastructure.array._array_builder``).
"""

from __future__ import annotations

from enum import Enum


class Layout(str, Enum):
    """
    Runtime layout of an array header.

    Members
    -------
    FLAT
        ``ndim == 1``; numeric loops run directly on a single strided run.
    STRIDED
        ``ndim > 1``; operations decompose the array into flat runs first.
    """

    FLAT = "flat"
    STRIDED = "strided"

    @classmethod
    def of(cls, ndim: int) -> "Layout":
        return cls.FLAT if ndim == 1 else cls.STRIDED

    def __str__(self) -> str:
        return self.value
