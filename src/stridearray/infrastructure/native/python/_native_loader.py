"""
stridearray native shared library loader.

This module centralizes the logic for resolving and loading the optional
native dense-kernel library via ``ctypes``, including platform-specific
filename conventions and Windows DLL directory handling.

Design goals
------------
- Provide a **stable, cross-platform loading API** for native kernels.
- Keep native acceleration an **optional optimization layer**: every kernel
  has a NumPy fallback in ``stridearray.infrastructure.ops.flat_cpu`` that
  produces identical results.

Resolution policy
-----------------
1. An explicit ``lib_path`` argument always wins.
2. Otherwise the ``STRIDEARRAY_NATIVE_LIB`` environment variable, if set.
3. Otherwise the libraries next to this module, in priority order:
   OpenMP variant (``*_omp``), single-threaded variant (``*_noomp``) and the
   plain default name.

Setting ``STRIDEARRAY_DISABLE_NATIVE`` to ``1``/``true``/``yes`` makes
:func:`native_disabled` return True; the dispatch layer then never calls
the loader.

Scope
-----
This module only locates and loads the library. Symbol binding lives in
``flat_ctypes`` and the native/fallback decision in
``stridearray.infrastructure.ops.flat_cpu_ext``.
"""

from __future__ import annotations

import ctypes
import logging
import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

ENV_LIB_PATH = "STRIDEARRAY_NATIVE_LIB"
ENV_DISABLE = "STRIDEARRAY_DISABLE_NATIVE"


class NativeLibraryNotFoundError(OSError):
    """No library file exists at any default candidate location."""


def native_disabled() -> bool:
    """Return True if native loading is switched off via the environment."""
    return os.environ.get(ENV_DISABLE, "").strip().lower() in ("1", "true", "yes")


def _variant_lib_name(variant: str) -> str:
    """
    Return the platform-specific filename for a native library variant.

    Parameters
    ----------
    variant : str
        ``"omp"``, ``"noomp"`` or ``"default"``.

    Returns
    -------
    str
        The filename (not a full path) for the requested variant on the
        current OS: ``*.dll`` on Windows, ``lib*.dylib`` on macOS and
        ``lib*.so`` elsewhere.
    """
    v = variant.lower()
    if v == "default":
        stem = "stridearray_native"
    elif v in ("omp", "noomp"):
        stem = f"stridearray_native_{v}"
    else:
        raise ValueError(f"Unknown variant: {variant!r}")

    if sys.platform.startswith("win"):
        return f"{stem}.dll"
    if sys.platform == "darwin":
        return f"lib{stem}.dylib"
    return f"lib{stem}.so"


@lru_cache(maxsize=1)
def load_stridearray_native(lib_path: Optional[str] = None) -> ctypes.CDLL:
    """
    Load the stridearray native shared library via ctypes.

    Parameters
    ----------
    lib_path : Optional[str]
        Path to a specific library file. If provided, no search occurs.

    Returns
    -------
    ctypes.CDLL
        A loaded ctypes handle to the native library.

    Raises
    ------
    FileNotFoundError
        If an explicit path (argument or environment) does not exist.
    NativeLibraryNotFoundError
        If no explicit path is given and no candidate file exists.
    OSError
        If none of the candidate libraries can be loaded.
    """
    if lib_path is None:
        lib_path = os.environ.get(ENV_LIB_PATH) or None

    if lib_path is not None:
        return _load_cdll_with_windows_dirs(Path(lib_path).resolve())

    base_dir = Path(__file__).resolve().parent
    candidates = [
        base_dir / _variant_lib_name("omp"),
        base_dir / _variant_lib_name("noomp"),
        base_dir / _variant_lib_name("default"),
    ]

    if not any(p.exists() for p in candidates):
        raise NativeLibraryNotFoundError(
            "No stridearray native library is installed. Looked for:\n"
            + "\n".join(f"- {p}" for p in candidates)
        )

    errors: list[str] = []
    for p in candidates:
        if not p.exists():
            logger.debug("native library candidate missing: %s", p)
            errors.append(f"- {p} (missing)")
            continue
        try:
            lib = _load_cdll_with_windows_dirs(p)
        except OSError as e:
            logger.debug("native library candidate failed: %s (%s)", p, e)
            errors.append(f"- {p} (failed to load: {e})")
            continue
        logger.debug("loaded native library: %s", p)
        return lib

    raise OSError(
        "Failed to load any stridearray native library. Tried:\n" + "\n".join(errors)
    )


def _load_cdll_with_windows_dirs(dll_path: Path) -> ctypes.CDLL:
    if not dll_path.exists():
        raise FileNotFoundError(f"Native library not found: {dll_path}")

    handles = []
    if sys.platform.startswith("win") and hasattr(os, "add_dll_directory"):
        dll_dir = str(dll_path.parent)
        try:
            handles.append(os.add_dll_directory(dll_dir))
        except OSError as e:
            raise OSError(
                f"add_dll_directory failed for dll_dir={dll_dir!r} "
                f"winerror={getattr(e, 'winerror', None)} strerror={e.strerror!r}"
            ) from e

    dll_str = str(dll_path)
    try:
        lib = ctypes.CDLL(dll_str)
    except OSError as e:
        raise OSError(
            f"ctypes.CDLL failed for dll={dll_str!r} "
            f"errno={getattr(e, 'errno', None)} strerror={getattr(e, 'strerror', None)!r}"
        ) from e

    # directory registrations must outlive the library handle
    setattr(lib, "_stridearray_dll_dir_handles", handles)
    return lib
