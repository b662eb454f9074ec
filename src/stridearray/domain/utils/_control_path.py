"""
State-based method dispatch (a.k.a. "control-path" templating) via decorators.

This module provides a small mechanism for routing a single method call to
one of several registered implementations based on a runtime attribute of
the receiver.

Core idea
---------
- A *base* method is declared on a mixin class (its signature and docstring
  become the canonical ones).
- Implementations ("control paths") are registered for that method, each
  keyed by ``(ClassName, MethodName, StateVal)``.
- At runtime the installed wrapper reads the state attribute of ``self``
  and calls the implementation registered for that value.

In stridearray the state attribute is ``layout``: flat arrays and general
strided arrays register separate implementations of the same public method,
so the flat fast path is chosen by a runtime check on cached header metadata
instead of by subclassing.

Important notes
---------------
- Decorating a control path mutates the class: the base method name is
  replaced with a dispatching wrapper.
- Registered implementations live in a closure-local mapping owned by the
  builder returned from :func:`create_path_builder`. Different builders do
  not share mappings.
- Implementations are called as bound methods, i.e. ``impl(self, *args)``.
"""

from __future__ import annotations

from collections import namedtuple
from functools import wraps
from typing import Any, Callable, Dict, Hashable, Optional, Type, Union

from typing_extensions import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")


def create_path_builder(
    state_attr: str,
) -> Callable[
    [
        Type,
        Callable[P, R],
        Hashable,
        Optional[Union[Type[Exception], Callable[[Callable[P, R], Any], None]]],
    ],
    Callable[[Callable[P, R]], Callable[P, R]],
]:
    """
    Create a "path builder" used to register control paths for methods.

    Usage::

        manager = create_path_builder("layout")

        class Mixin:
            def total(self) -> float: ...

        @manager(Mixin, Mixin.total, Layout.FLAT)
        def total_flat(self) -> float: ...

        @manager(Mixin, Mixin.total, Layout.STRIDED)
        def total_strided(self) -> float: ...

    Parameters
    ----------
    state_attr : str
        Name of the attribute read from ``self`` to select a control path.

    Returns
    -------
    Callable
        ``(cls, method, state, trap_exception=None) -> decorator``.
    """

    MethodKey = namedtuple("MethodKey", ["ClassName", "MethodName", "StateVal"])

    methods_map: Dict[MethodKey, Callable] = {}

    def templator(
        cls: Type,
        method: Callable[P, R],
        state: Hashable,
        trap_exception: Optional[
            Union[Type[Exception], Callable[[Callable[P, R], Any], None]]
        ] = None,
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """
        Build a decorator that registers a control path implementation.

        Parameters
        ----------
        cls : Type
            Class whose method is replaced by the dispatching wrapper.
        method : Callable[P, R]
            The base method being templated. Its metadata is copied onto the
            wrapper via ``functools.wraps``.
        state : Hashable
            State value selecting the decorated implementation.
        trap_exception : optional
            What to do when no control path matches the runtime state:

            - ``None``: raise ``NotImplementedError``;
            - an exception type: raise it;
            - any other callable: call it as ``trap_exception(method, state)``
              and then raise ``NotImplementedError``.

        Raises
        ------
        TypeError
            If ``state`` is not hashable.
        """
        try:
            hash(state)
        except TypeError:
            raise TypeError(f"The argument for 'state' must be hashable. Got {state!r}")

        name = method.__name__
        smk = MethodKey(cls.__name__, name, state)

        def decorator(sub_method: Callable[P, R]) -> Callable[P, R]:
            methods_map[smk] = sub_method

            @wraps(method)
            def wrapper(self: Any, *args: P.args, **kwargs: P.kwargs) -> Any:
                try:
                    cur = getattr(self, state_attr)
                except AttributeError:
                    raise NotImplementedError(
                        f"{type(self)} is missing attribute {state_attr!r}"
                    ) from None
                sm = methods_map.get(MethodKey(cls.__name__, name, cur))
                if sm is not None:
                    return sm(self, *args, **kwargs)
                if trap_exception is None:
                    raise NotImplementedError(
                        f"Missing control path ({state_attr}={cur!r}) for {name}"
                    )
                if isinstance(trap_exception, type) and issubclass(
                    trap_exception, BaseException
                ):
                    raise trap_exception(name)
                trap_exception(method, cur)
                raise NotImplementedError(
                    f"Missing control path ({state_attr}={cur!r}) for {name}"
                )

            setattr(cls, name, wrapper)
            return sub_method

        return decorator

    return templator
