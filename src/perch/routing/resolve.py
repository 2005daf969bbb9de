"""Handler import resolution — resolves ``"module:attribute"`` strings to callables.

Routes may be registered with a string reference instead of a callable.
The reference is only resolved when the route is dispatched, so the
target module doesn't have to be importable at registration time.
"""

import importlib
from typing import Any

from perch.errors import InvalidControllerError


def resolve_handler(reference: str) -> Any:
    """Resolve an import string to a callable.

    Accepts ``"module:attribute"`` and ``"module.attribute"``. The attribute
    part may be dotted (``"myapp.views:Widgets.index"``).

    Raises ``InvalidControllerError`` if the module or attribute cannot
    be found, or if the target isn't callable.
    """
    if ":" in reference:
        module_path, _, attr_path = reference.partition(":")
    else:
        module_path, _, attr_path = reference.rpartition(".")

    if not module_path or not attr_path:
        msg = f"Handler reference {reference!r} is not of the form 'module:attribute'"
        raise InvalidControllerError(msg)
    if module_path.startswith("."):
        msg = f"Handler reference {reference!r} must name an absolute module"
        raise InvalidControllerError(msg)

    try:
        obj: Any = importlib.import_module(module_path)
    except (ImportError, TypeError, ValueError) as exc:
        msg = f"Handler reference {reference!r}: cannot import {module_path!r}"
        raise InvalidControllerError(msg) from exc

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            msg = f"Handler reference {reference!r}: {module_path!r} has no {attr_path!r}"
            raise InvalidControllerError(msg) from exc

    if not callable(obj):
        msg = f"Handler reference {reference!r} resolved to {type(obj).__name__}, not a callable"
        raise InvalidControllerError(msg)
    return obj
