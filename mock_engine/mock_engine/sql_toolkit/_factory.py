"""SQL toolkit factory.

:func:`get_sql_toolkit` is the one place consumer code obtains a toolkit.
The instance is shared process-wide; implementations must be stateless so
concurrent jobs can use it without coordination.
"""

from __future__ import annotations

import threading
from typing import Callable

from ._protocols import SqlToolkit

_lock = threading.Lock()
_instance: SqlToolkit | None = None
_factory_fn: Callable[[], SqlToolkit] | None = None


def register_implementation(factory_fn: Callable[[], SqlToolkit]) -> None:
    """Substitute another SQL front-end.

    The next :func:`get_sql_toolkit` call builds its instance with
    *factory_fn*.  Without a registration the sqlglot adapter is used.
    """
    global _factory_fn, _instance
    with _lock:
        _factory_fn = factory_fn
        _instance = None


def get_sql_toolkit() -> SqlToolkit:
    """Return the shared :class:`SqlToolkit`, creating it on first use."""
    global _instance
    if _instance is not None:
        return _instance

    with _lock:
        if _instance is not None:
            return _instance

        if _factory_fn is not None:
            _instance = _factory_fn()
        else:
            from .impl.sqlglot_impl import SqlGlotToolkit

            _instance = SqlGlotToolkit()

        return _instance


def reset_toolkit() -> None:
    """Forget the shared instance and any registered factory.  **For tests.**"""
    global _instance, _factory_fn
    with _lock:
        _instance = None
        _factory_fn = None
