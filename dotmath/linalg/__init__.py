# flake8: noqa

"""
Linear Algebra Routines

Small fixed-size value types: vectors, 3x3 and 4x4 matrices with a type tag
that selects fast paths, quaternions, planes and rays. Use ``to_numpy()`` to
hand them to `pylinalg <https://github.com/pygfx/pylinalg>`_ or numpy.

"""

from .utils import *
from .vector2 import *
from .vector3 import *
from .vector4 import *
from .matrix3 import *
from .matrix4 import *
from .quaternion import *
from .ray2 import *
from .ray3 import *
from .plane3 import *
