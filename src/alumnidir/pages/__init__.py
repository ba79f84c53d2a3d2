"""NiceGUI pages for the alumni directory.

Import this module to register all page routes with NiceGUI.
"""

from alumnidir.pages import index, profile

__all__ = ["index", "profile"]

# Touch modules to prevent linter from removing "unused" imports.
# These imports register @ui.page decorators as a side effect.
_PAGES = (index, profile)
