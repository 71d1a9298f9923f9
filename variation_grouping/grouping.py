"""
Variation grouping: deduplicate per-column patterns into labelled groups.

For every active selection the data columns are scanned left to right;
the first column showing a pattern creates its group, so group ids follow
first-seen order and the leftmost column always decides ties.  Patterns
are computed per column first and only then merged in a single ordered
pass, which keeps id assignment independent of how the patterns were
produced.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .codec import column_key, index_to_col_letter
from .config import LABEL_STYLES
from .errors import InvalidConfiguration
from .features import locate_feature_rows
from .grid import cell_text
from .patterns import pattern_from_rows, pattern_length, selection_rows

logger = logging.getLogger(__name__)

DEFAULT_SELECTION_NAME = "default"


def _rgb_hex(r, g, b):
    return f"#{r:02X}{g:02X}{b:02X}"


# Blue-ish cycle used for MAP labels in the source workbooks (period 20).
DEFAULT_PALETTE = tuple(
    _rgb_hex(230 - (i * 25) % 100, 240 - (i * 40) % 100, 255)
    for i in range(1, 21)
)

# Orange-ish cycle used for VARIANT labels (period 60).
WARM_PALETTE = tuple(
    _rgb_hex(255, 220 - (i * 35) % 100, 180 + (i * 20) % 75)
    for i in range(60)
)

# Per-selection palettes used by the command-line tool.
SELECTION_PALETTES = {"MAP": DEFAULT_PALETTE, "VARIANT": WARM_PALETTE}


@dataclass(frozen=True)
class VariationGroup:
    """Columns sharing one exact pattern under one selection."""
    id: Any
    display_name: str
    color: str
    pattern: str
    columns: tuple
    selection: str = DEFAULT_SELECTION_NAME


@dataclass(frozen=True)
class VariationAnalysis:
    """Groups plus ``{column_key: {selection: group_id}}``.

    Treat as read-only; :mod:`relabel` produces modified copies.
    """
    # column_mapping is a dict, so instances are unhashable
    __hash__ = None

    groups: tuple = ()
    column_mapping: dict = field(default_factory=dict)
    label_style: str = "letter"

    def is_empty(self):
        return not self.groups

    def selections(self):
        """Selection names in the order their groups appear."""
        names = []
        for g in self.groups:
            if g.selection not in names:
                names.append(g.selection)
        return names

    def groups_for(self, selection):
        return [g for g in self.groups if g.selection == selection]

    def group(self, selection, group_id):
        """First group of *selection* labelled *group_id*, or ``None``."""
        for g in self.groups:
            if g.selection == selection and g.id == group_id:
                return g
        return None

    def mapping_for(self, selection):
        """``{column_key: group_id}`` for one selection."""
        return {
            col: ids[selection]
            for col, ids in self.column_mapping.items()
            if selection in ids
        }


def empty_analysis(label_style="letter"):
    return VariationAnalysis(groups=(), column_mapping={}, label_style=label_style)


def group_label(order, label_style):
    """Id for the *order*-th (zero-based) group: ``A, B, ...`` or ``0, 1, ...``."""
    if label_style == "letter":
        return index_to_col_letter(order + 1)
    if label_style == "number":
        return order
    raise InvalidConfiguration(f"Unknown label style: {label_style!r}")


def group_color(order, palette=DEFAULT_PALETTE):
    return palette[order % len(palette)]


def data_column_range(grid, config):
    """Inclusive zero-based ``(start, end)`` of the data columns.

    *end* is the last column holding a non-blank value in any row; when
    ``start > end`` there is no data to analyse.
    """
    end = -1
    for cells in grid:
        if cells is None:
            continue
        for col in range(len(cells) - 1, end, -1):
            if cell_text(cells[col]):
                end = col
                break
    return config.data_start_column, end


def named_selections(selections):
    """Accept ``{name: selection}`` or a single bare selection.

    A table whose values are all mappings or ``None`` (at least one being a
    mapping) is named; its ``None`` entries are disabled and dropped.
    Anything else is a bare selection, returned under
    :data:`DEFAULT_SELECTION_NAME`.
    """
    if not selections:
        return {}
    values = list(selections.values())
    if (any(isinstance(v, Mapping) for v in values)
            and all(v is None or isinstance(v, Mapping) for v in values)):
        return {name: sel for name, sel in selections.items() if sel is not None}
    return {DEFAULT_SELECTION_NAME: selections}


def palette_for(palette, selection_name):
    """Colors for one selection.

    *palette* is either one sequence shared by every selection or a
    ``{selection: sequence}`` mapping; names missing from the mapping use
    :data:`DEFAULT_PALETTE`.
    """
    if isinstance(palette, Mapping):
        palette = palette.get(selection_name, DEFAULT_PALETTE)
    if not palette:
        raise InvalidConfiguration(
            f"Palette for {selection_name!r} must hold at least one color")
    return palette


def _merge_patterns(selection_name, keys, patterns, label_style, palette, mapping):
    """Single left-to-right pass turning column patterns into groups."""
    members = {}
    for key, pattern in zip(keys, patterns):
        members.setdefault(pattern, []).append(key)

    groups = []
    for order, (pattern, cols) in enumerate(members.items()):
        group_id = group_label(order, label_style)
        groups.append(VariationGroup(
            id=group_id,
            display_name=str(group_id),
            color=group_color(order, palette),
            pattern=pattern,
            columns=tuple(cols),
            selection=selection_name,
        ))
        for key in cols:
            mapping[key][selection_name] = group_id
    return groups


def analyze_variations(grid, config, selections, label_style="letter",
                       palette=DEFAULT_PALETTE):
    """Classify the data columns of *grid* into variation groups.

    Parameters
    ----------
    grid : list[list]
        Row-major cell values.
    config : Configuration
        Grid layout.
    selections : dict
        ``{name: {feature: [items]}}``, or one bare ``{feature: [items]}``
        which is analysed under the name ``"default"``.
    label_style : str
        ``"letter"`` for ids ``A, B, ...``; ``"number"`` for ``0, 1, ...``.
    palette : sequence[str] or dict
        Colors assigned by group creation order, cycling when exhausted.
        A ``{selection: colors}`` mapping gives each selection its own
        cycle (see :func:`palette_for`).

    Returns
    -------
    VariationAnalysis
        Empty when no column is in range or no selection has any
        (feature, item) pair.
    """
    if label_style not in LABEL_STYLES:
        raise InvalidConfiguration(f"Unknown label style: {label_style!r}")

    named = named_selections(selections)
    active = [(name, sel) for name, sel in named.items() if pattern_length(sel) > 0]
    colors = {name: palette_for(palette, name) for name, _ in active}
    start, end = data_column_range(grid, config)

    if start > end or not active:
        logger.info("Nothing to analyse (columns %d..%d, %d active selections)",
                    start, end, len(active))
        return empty_analysis(label_style)

    feature_rows = locate_feature_rows(grid, config)
    columns = range(start, end + 1)
    keys = [column_key(c) for c in columns]
    mapping = {key: {} for key in keys}

    groups = []
    for name, selection in active:
        rows = selection_rows(selection, feature_rows)
        patterns = [pattern_from_rows(grid, col, rows) for col in columns]
        found = _merge_patterns(name, keys, patterns, label_style, colors[name], mapping)
        logger.debug("Selection %s: %d columns -> %d groups", name, len(keys), len(found))
        groups.extend(found)

    return VariationAnalysis(groups=tuple(groups), column_mapping=mapping,
                             label_style=label_style)
