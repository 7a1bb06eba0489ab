"""GAC - git auto-commit on save.

Commits a watched file after every save and optionally pushes it.
"""

__version__ = "0.1.0"
__author__ = "GAC Team"

from gac.exceptions import GacError
from gac.handler import SaveEventHandler
from gac.session import FileSession, SessionRegistry

__all__ = [
    "__version__",
    "GacError",
    "FileSession",
    "SessionRegistry",
    "SaveEventHandler",
]
