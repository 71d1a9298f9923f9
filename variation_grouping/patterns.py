"""
Per-column pattern signatures.

A pattern is one mark per selected (feature, item) pair, in selection
order, joined with :data:`PATTERN_DELIMITER`.  Two columns share a
pattern iff the strings are identical, so the layout must never depend on
anything but the selection and the grid.
"""

from .features import locate_feature_rows
from .grid import cell_text, get_cell

APPLIED_MARK = "O"
NOT_APPLIED_MARK = "-"
PATTERN_DELIMITER = "|"


def is_applied(value):
    """True iff the cell holds an apply mark (``O``, any case, trimmed)."""
    return cell_text(value).upper() == APPLIED_MARK


def iter_selection_pairs(selection):
    """Yield ``(feature, item)`` in selection order, names trimmed."""
    for feature_name, items in selection.items():
        for item_name in items or ():
            yield cell_text(feature_name), cell_text(item_name)


def pattern_length(selection):
    return sum(1 for _ in iter_selection_pairs(selection))


def selection_rows(selection, feature_rows):
    """Row index per selected pair, ``None`` where the pair has no row."""
    return [
        feature_rows.get(feature_name, {}).get(item_name)
        for feature_name, item_name in iter_selection_pairs(selection)
    ]


def build_pattern(grid, column, config, selection, feature_rows=None):
    """Build the pattern string of zero-based *column* for *selection*.

    *feature_rows* is the output of :func:`locate_feature_rows`; pass it
    when building many columns to avoid rescanning the feature area.
    Unknown features and items contribute a not-applied mark.
    """
    if feature_rows is None:
        feature_rows = locate_feature_rows(grid, config)
    rows = selection_rows(selection, feature_rows)
    return pattern_from_rows(grid, column, rows)


def pattern_from_rows(grid, column, rows):
    marks = [
        APPLIED_MARK if row is not None and is_applied(get_cell(grid, row, column))
        else NOT_APPLIED_MARK
        for row in rows
    ]
    return PATTERN_DELIMITER.join(marks)
