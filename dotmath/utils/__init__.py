"""
Utility functions for dotmath.

.. currentmodule:: dotmath.utils

.. autosummary::
    :toctree: utils/

    enums
    assert_type

Transform classes
-----------------

Stateful wrappers around a matrix that keep the inverse, the transpose and
the inverse-transpose cached until the matrix changes.

.. autosummary::
    :toctree: utils/

    transform.Transform3
    transform.Transform4
    transform.TransformEvent

"""

import os
import types
import logging
import inspect

from . import enums  # noqa: F401


logger = logging.getLogger("dotmath")


def _set_log_level():
    # Set default level
    logger.setLevel(logging.WARN)
    # Set user-specified level
    level = os.getenv("DOTMATH_LOG_LEVEL", "")
    if level:
        try:
            if level.isnumeric():
                logger.setLevel(int(level))
            else:
                logger.setLevel(level.upper())
        except Exception:
            logger.warning(f"Invalid dotmath log level: {level}")


_set_log_level()


def assert_type(name, value, *classes):
    """Raise a TypeError when ``value`` is not an instance of ``classes``.

    If the first class is None, a None value is accepted too. The traceback
    of the raised error points at the code that passed the bad value.
    """
    allow_none = False
    if classes[0] is None:
        if value is None:
            return
        allow_none = True
        classes = classes[1:]

    if not isinstance(value, classes):
        # Get traceback object to point of the frame of interest
        f = inspect.currentframe()
        f = f.f_back
        if name:
            # Step back to calling code
            f = f.f_back
            # Constructors that take name as a (kw) argument need one more step
            if f.f_code.co_name == "__init__" and name in f.f_code.co_varnames:
                f = f.f_back
        tb = types.TracebackType(None, f, f.f_lasti, f.f_lineno)

        msg = "Expected"
        if name:
            msg += f" '{name}' to be"
        class_strings = [cls.__name__ for cls in classes]
        msg += f" an instance of {' | '.join(class_strings)}"
        if allow_none:
            msg += " or None"
        msg += f", but got {value.__class__.__name__} object."

        raise TypeError(msg).with_traceback(tb) from None
