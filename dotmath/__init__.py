"""Fixed-dimension linear algebra for 2D and 3D graphics."""

# flake8: noqa

from ._version import __version__, version_info
from . import utils

from .linalg import *

from .utils import enums, logger
from .utils.enums import *
from .utils.transform import Transform3, Transform4, TransformEvent


__pylinalg_version_range__ = "0.5.1", "0.7.0"


def _check_lib_version(libname, pipname, version_range):
    import importlib

    lib = importlib.import_module(libname)
    min_ver, max_ver = (tuple(map(int, v.split("."))) for v in version_range)
    detected = f"Detected {lib.__version__}, need >={version_range[0]}, <{version_range[1]}."
    lib_version_info = tuple(
        int(i) for i in lib.__version__.split("+")[0].split(".")[:3] if i.isnumeric()
    )
    if lib_version_info < min_ver:
        logger.error(
            f"Incompatible version of {libname}:\n    {detected}\n    To update, use e.g. `pip install -U {pipname}`."
        )
    elif lib_version_info >= max_ver:
        logger.warning(f"Possible incompatible version of {libname}:\n    {detected}")


_check_lib_version("pylinalg", "pylinalg", __pylinalg_version_range__)
