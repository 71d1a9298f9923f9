"""Error kinds raised by the variation-grouping engine.

Codec and configuration errors signal a caller contract violation and are
raised at the point of detection.  "No data" situations are never errors:
the engine returns empty results for them instead.
"""


class VariationError(Exception):
    """Base class for all engine errors."""


class InvalidColumnLetter(VariationError, ValueError):
    """Column letters were empty or contained non A-Z characters."""


class InvalidColumnIndex(VariationError, ValueError):
    """A column index was negative."""


class InvalidConfiguration(VariationError):
    """Configuration values are missing or out of range."""


class SheetNotFound(VariationError, LookupError):
    """The requested worksheet does not exist in the workbook."""
