from .config import Config
from .errors import (
    FileKind,
    MalformedFileError,
    ReadFailureError,
    SpreadsheetError,
    UnsupportedFormatError,
)
