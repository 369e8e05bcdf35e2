"""aliasx: alias e(x)tended task runner."""

from aliasx.config import VERSION

__version__ = VERSION
