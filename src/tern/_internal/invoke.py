"""Invoke helpers — call user-provided codecs uniformly.

Encoders and decoders may be plain one-argument functions
(``json.dumps``) or richer callables that also want the handler and the
response. This module keeps the arity check in exactly one place.

Usage::

    from tern._internal.invoke import invoke

    body = invoke(encoder, data, handler, response)
"""

import inspect
from typing import Any


def _positional_capacity(func: Any) -> int | None:
    """Number of positional arguments *func* accepts, ``None`` for unlimited."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures take the data only.
        return 1
    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def invoke(func: Any, *args: Any) -> Any:
    """Call *func* with as many leading positional *args* as it accepts.

    Works with both simple and context-aware codecs::

        invoke(json.dumps, data, handler, response)          # json.dumps(data)
        invoke(lambda d, h: h.cast, data, handler, response)  # (data, handler)
    """
    capacity = _positional_capacity(func)
    if capacity is None:
        return func(*args)
    return func(*args[: max(capacity, 1)])
