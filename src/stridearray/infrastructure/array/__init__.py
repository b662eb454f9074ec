from ._array import F64Array
from ._viewer import _I

__all__ = [F64Array.__name__, "_I"]
