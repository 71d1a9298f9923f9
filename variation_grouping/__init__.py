"""Variation grouping for specification spreadsheets.

Classifies the data columns of a feature sheet into **variation groups**:
columns that carry the same apply/not-apply marks (``O`` / ``-``) over a
chosen set of (feature, item) rows.

  * :func:`extract_features` recovers the feature -> item tree.
  * :func:`build_pattern` turns one column into its pattern string.
  * :func:`analyze_variations` deduplicates patterns into labelled,
    colored groups for one or more named selections.
  * :func:`relabel_groups` renames groups without breaking the
    column -> group mapping.
  * :func:`export_grid` appends the group ids back onto the grid.

File handling lives in :mod:`workbook_io`; everything else is pure.
"""

from .codec import col_letter_to_index, index_to_col_letter
from .config import Configuration, load_config
from .errors import (
    InvalidColumnIndex,
    InvalidColumnLetter,
    InvalidConfiguration,
    SheetNotFound,
    VariationError,
)
from .exporter import export_grid, summary_frame, summary_rows
from .features import Feature, Item, extract_features
from .grouping import VariationAnalysis, VariationGroup, analyze_variations
from .patterns import build_pattern
from .relabel import relabel_groups

__all__ = [
    "col_letter_to_index",
    "index_to_col_letter",
    "Configuration",
    "load_config",
    "InvalidColumnIndex",
    "InvalidColumnLetter",
    "InvalidConfiguration",
    "SheetNotFound",
    "VariationError",
    "export_grid",
    "summary_frame",
    "summary_rows",
    "Feature",
    "Item",
    "extract_features",
    "VariationAnalysis",
    "VariationGroup",
    "analyze_variations",
    "build_pattern",
    "relabel_groups",
]
