"""
Versioning for dotmath. We use a hard-coded version number, because it's simple
and always works.
"""

# This is the reference version number, to be bumped before each release.
__version__ = "0.3.0"

version_info = tuple(
    int(i) if i.isnumeric() else i for i in __version__.split("+")[0].split(".")
)
