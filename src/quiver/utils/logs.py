"""
Debug output helper.
"""

import sys

from ..config import settings


# Helper function to print to stderr (the JSON export uses stdout)
def log_debug(message: str):
    """Logs debug messages to stderr when QUIVER_DEBUG is enabled."""
    if settings.DEBUG:
        print(message, file=sys.stderr)
