"""
Project a variation analysis back onto tabular output.

* :func:`export_grid` - the original rows plus one id row per selection.
* :func:`export_fills` - the color of every exported id cell.
* :func:`summary_rows` / :func:`summary_frame` - one line per group.
"""

import pandas as pd

from .codec import column_key, column_position
from .grid import copy_grid, grid_width

SUMMARY_COLUMNS = [
    "Selection",
    "Group ID",
    "Display Name",
    "Pattern",
    "Color",
    "Column Count",
    "Columns",
]


def _export_width(grid, analysis, config, with_labels):
    width = grid_width(grid)
    for col in analysis.column_mapping:
        width = max(width, column_position(col) + 1)
    if with_labels:
        width = max(width, config.feature_column + 1)
    return width


def export_grid(grid, analysis, config, with_labels=False):
    """Return a fresh grid: *grid* followed by one group-id row per selection.

    Each appended row holds the column's group id at every mapped data
    column and ``None`` elsewhere.  With *with_labels* a blank separator
    row is inserted first and the feature-column cell of each id row reads
    ``"<group count> <selection>"``; the label is left out when the feature
    column is itself a mapped data column.  *grid* is not modified.
    """
    exported = copy_grid(grid)
    selections = analysis.selections()
    if not selections:
        return exported

    width = _export_width(grid, analysis, config, with_labels)
    if with_labels:
        exported.append([])

    for selection in selections:
        row = [None] * width
        ids = analysis.mapping_for(selection)
        for col, group_id in ids.items():
            row[column_position(col)] = group_id
        if with_labels and column_key(config.feature_column) not in ids:
            count = len(analysis.groups_for(selection))
            row[config.feature_column] = f"{count} {selection}"
        exported.append(row)
    return exported


def export_fills(grid, analysis, with_labels=False):
    """``{(row, col): color}`` for the id cells written by :func:`export_grid`."""
    fills = {}
    row = len(grid) + (1 if with_labels and analysis.groups else 0)
    for selection in analysis.selections():
        for group in analysis.groups_for(selection):
            for col in group.columns:
                fills[(row, column_position(col))] = group.color
        row += 1
    return fills


def summary_rows(analysis):
    """Header row followed by one row per group, in analysis order."""
    rows = [list(SUMMARY_COLUMNS)]
    for g in analysis.groups:
        rows.append([
            g.selection,
            g.id,
            g.display_name,
            g.pattern,
            g.color,
            len(g.columns),
            ", ".join(g.columns),
        ])
    return rows


def summary_frame(analysis):
    """The summary table as a :class:`pandas.DataFrame`."""
    rows = summary_rows(analysis)
    return pd.DataFrame(rows[1:], columns=rows[0])
