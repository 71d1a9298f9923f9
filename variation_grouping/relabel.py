"""
Group renaming.

Renames never mutate the analysis they are given.  Every rewrite is
computed from one snapshot of the rename table, so group records and
column mappings always move together and swaps such as ``{A: B, B: A}``
behave as expected.
"""

import logging
from dataclasses import replace

from .grouping import VariationAnalysis

logger = logging.getLogger(__name__)


def _applies(group_selection, selection):
    return selection is None or group_selection == selection


def relabel_groups(analysis, renames, selection=None):
    """Return a copy of *analysis* with group ids rewritten via *renames*.

    *renames* maps old id -> new id; ids not listed are kept.  When
    *selection* is given only that selection's groups are touched.  A new
    id may collide with an existing one: the groups stay separate records.
    """
    renames = dict(renames)

    groups = []
    for g in analysis.groups:
        if _applies(g.selection, selection) and g.id in renames:
            new_id = renames[g.id]
            groups.append(replace(g, id=new_id, display_name=str(new_id)))
        else:
            groups.append(g)

    mapping = {}
    for col, ids in analysis.column_mapping.items():
        mapping[col] = {
            sel: renames[gid] if _applies(sel, selection) and gid in renames else gid
            for sel, gid in ids.items()
        }

    logger.debug("Relabelled %d ids (selection=%s)", len(renames), selection)
    return VariationAnalysis(groups=tuple(groups), column_mapping=mapping,
                             label_style=analysis.label_style)


def relabel_all(analysis, renames_by_selection):
    """Apply ``{selection: {old: new}}`` one selection at a time."""
    for selection, renames in (renames_by_selection or {}).items():
        analysis = relabel_groups(analysis, renames or {}, selection=selection)
    return analysis


def rename_display_names(analysis, names, selection=None):
    """Change only the friendly names of groups, keyed by group id."""
    groups = tuple(
        replace(g, display_name=str(names[g.id]))
        if _applies(g.selection, selection) and g.id in names else g
        for g in analysis.groups
    )
    mapping = {col: dict(ids) for col, ids in analysis.column_mapping.items()}
    return replace(analysis, groups=groups, column_mapping=mapping)
