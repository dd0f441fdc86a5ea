"""bakesh command line.

``cli`` and ``main`` are looked up lazily so that ``python -m
bakesh.cli.main`` does not find its own module already imported.
"""

import importlib

__all__ = ["cli", "main"]


def __getattr__(name):  # pragma: no cover - trivial lazy import
    if name not in __all__:
        raise AttributeError(name)
    return getattr(importlib.import_module(".main", __name__), name)
