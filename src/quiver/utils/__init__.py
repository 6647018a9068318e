"""
Utilities for the Quiver library reader
"""

from .logs import log_debug
from .resources import decode_data_uri, encode_data_uri, guess_mime_type, read_note_resources
from .timestamps import Timestamp, from_epoch, to_epoch

__all__ = [
    "log_debug",
    "decode_data_uri",
    "encode_data_uri",
    "guess_mime_type",
    "read_note_resources",
    "Timestamp",
    "from_epoch",
    "to_epoch"
]
