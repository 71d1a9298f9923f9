"""
Feature / item extraction.

Feature sheets list one feature per block: the feature name sits in the
feature column of the block's first row, item names sit in the item
column, and following rows with a blank feature cell continue the same
feature (the usual merged-cell convention).  A row where both columns are
blank ends the feature area.
"""

import logging
from dataclasses import dataclass, field

from .grid import cell_text, get_cell, row_reaches

logger = logging.getLogger(__name__)


@dataclass
class Item:
    name: str
    selected: bool = False


@dataclass
class Feature:
    name: str
    items: list = field(default_factory=list)
    selected: bool = False

    def item_names(self):
        return [item.name for item in self.items]


def _scan_feature_rows(grid, config):
    """Yield ``(row_index, feature_name, item_name)`` for the feature area.

    *item_name* may be ``""`` for a feature row without an item.
    """
    current = None
    row = config.start_row
    while row_reaches(grid, row, config.feature_column):
        feature = cell_text(get_cell(grid, row, config.feature_column))
        item = cell_text(get_cell(grid, row, config.item_column))
        if not feature and not item:
            break
        if feature:
            current = feature
        if current is not None:
            yield row, current, item
        row += 1


def extract_features(grid, config):
    """Recover the ordered feature -> item tree below ``config.start_row``.

    A feature name seen twice is merged into its first occurrence; item
    names are unique per feature but may repeat across features.
    """
    features = {}
    for _row, feature_name, item_name in _scan_feature_rows(grid, config):
        feature = features.get(feature_name)
        if feature is None:
            feature = features[feature_name] = Feature(feature_name)
        if item_name and item_name not in feature.item_names():
            feature.items.append(Item(item_name))

    logger.debug("Extracted %d features from row %d", len(features), config.start_row)
    return list(features.values())


def locate_feature_rows(grid, config):
    """Map ``feature -> {item -> row_index}`` (first row wins)."""
    located = {}
    for row, feature_name, item_name in _scan_feature_rows(grid, config):
        items = located.setdefault(feature_name, {})
        if item_name and item_name not in items:
            items[item_name] = row
    return located


def filter_grid_by_features(grid, config, feature_names):
    """Keep the header rows plus only the row blocks of *feature_names*.

    Rows above ``config.start_row`` are copied as-is.  Below it, a non-blank
    feature cell decides whether its block is kept; rows with a blank
    feature cell follow the last decision.
    """
    wanted = set(feature_names)
    filtered = [list(r) if r is not None else [] for r in grid[:config.start_row]]

    keep = False
    for row in range(config.start_row, len(grid)):
        name = cell_text(get_cell(grid, row, config.feature_column))
        if name:
            keep = name in wanted
        if keep:
            cells = grid[row]
            filtered.append(list(cells) if cells is not None else [])
    return filtered


def selection_from_features(features):
    """Selection of the selected features and their selected items, in tree order."""
    return {
        f.name: [item.name for item in f.items if item.selected]
        for f in features
        if f.selected
    }


def expand_selection(selection, features):
    """Replace ``None`` item lists with every extracted item of that feature."""
    by_name = {f.name: f for f in features}
    expanded = {}
    for feature_name, items in selection.items():
        if items is None:
            feature = by_name.get(feature_name)
            expanded[feature_name] = feature.item_names() if feature else []
        elif isinstance(items, (str, int, float)):
            expanded[feature_name] = [items]
        else:
            expanded[feature_name] = list(items)
    return expanded
