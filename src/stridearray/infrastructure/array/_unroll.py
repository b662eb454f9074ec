"""
Unroll metadata: how many leading axes of a strided array collapse into one
fixed-stride loop.

Scanning axes from the outermost to the innermost, a prefix of axes can be
visited with a single loop exactly when their strides form one arithmetic
progression: each accepted axis' stride must equal ``stride * shape`` of the
next non-trivial axis. Axes of size 1 contribute no iteration and never
break the progression.

Examples
--------
A dense ``(2, 3, 4)`` array has strides ``(12, 4, 1)`` and unrolls fully:
``UnrollInfo(dim=3, stride=1, size=24)``.

Its transpose (shape ``(4, 3, 2)``, strides ``(1, 4, 12)``) only unrolls its
first axis: ``UnrollInfo(dim=1, stride=1, size=4)``.

A column slice of a ``(3, 4)`` matrix (``slice(0, 2, axis=1)``, strides
``(4, 1)``, shape ``(3, 2)``) stops after the first axis because
``4 != 1 * 2``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class UnrollInfo:
    """
    Cached unroll metadata of an array header.

    Attributes
    ----------
    dim : int
        Length of the longest collapsible prefix of axes (``>= 1``).
    stride : int
        Buffer step of the collapsed loop.
    size : int
        Number of elements visited by the collapsed loop (product of the
        prefix shape).
    """

    dim: int
    stride: int
    size: int


def compute_unroll(strides: Sequence[int], shape: Sequence[int]) -> UnrollInfo:
    """
    Compute the unroll metadata of a header.

    Parameters
    ----------
    strides : Sequence[int]
        Per-axis buffer steps (non-zero).
    shape : Sequence[int]
        Per-axis sizes (``>= 1``), same length as ``strides``.

    Returns
    -------
    UnrollInfo
        ``dim`` is the largest prefix length whose axes form one arithmetic
        progression, ``stride`` its step and ``size`` its element count.
    """
    prev: Optional[int] = None
    dim = 0
    step = strides[0]
    size = 1
    for axis, (s, n) in enumerate(zip(strides, shape)):
        if dim != axis:
            break
        if n == 1:
            dim = axis + 1
            if prev is None:
                step = s
            continue
        if prev is None or prev == s * n:
            dim = axis + 1
            step = s
            size *= n
            prev = s
    return UnrollInfo(dim=dim, stride=step, size=size)


def prefix_unroll(
    strides: Sequence[int], shape: Sequence[int], n: int
) -> UnrollInfo:
    """
    Unroll metadata of the first ``n`` axes of a header whose full unrollable
    prefix is at least ``n`` long.

    The step is the stride of the innermost non-trivial axis among the first
    ``n``; if all of them have size 1 the step of axis ``n - 1`` is used.
    """
    step = strides[n - 1]
    for axis in range(n - 1, -1, -1):
        if shape[axis] > 1:
            step = strides[axis]
            break
    size = 1
    for d in shape[:n]:
        size *= d
    return UnrollInfo(dim=n, stride=step, size=size)
