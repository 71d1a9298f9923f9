#!/usr/bin/env python
"""
Variation grouping - CLI entry point.

Usage:
    # List the feature / item tree of a specification sheet
    python -m variation_grouping.main features <excel_file> [--config cfg.yaml] [--sheet Spec]

    # Group the data columns and write the annotated workbook
    python -m variation_grouping.main analyze <excel_file> --config cfg.yaml [--output out.xlsx]

    # Print the per-group summary table
    python -m variation_grouping.main summary <excel_file> --config cfg.yaml
"""

import argparse
import logging
import os
import sys

from variation_grouping.config import (
    configuration_from_dict,
    load_config,
    parse_configuration_sheet,
    validate_configuration,
)
from variation_grouping.errors import VariationError
from variation_grouping.exporter import (
    export_fills,
    export_grid,
    summary_frame,
    summary_rows,
)
from variation_grouping.features import expand_selection, extract_features
from variation_grouping.grouping import SELECTION_PALETTES, analyze_variations
from variation_grouping.relabel import relabel_all
from variation_grouping.workbook_io import load_grid, write_workbook

logger = logging.getLogger(__name__)


def setup_logging(level_str: str = "INFO"):
    """Configure logging."""
    level = getattr(logging, level_str.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )


def resolve_config(excel_path, config_path=None, config_sheet=None):
    """Config dict from a YAML file or from a configuration sheet."""
    if config_sheet:
        return parse_configuration_sheet(load_grid(excel_path, config_sheet))
    return load_config(config_path)


def run_analysis(excel_path, config, sheet=None, label_style=None):
    """Load the grid and classify it.

    Returns ``(grid, configuration, analysis)``; configured renames are
    already applied.
    """
    problems = validate_configuration(config)
    if problems:
        raise VariationError("; ".join(problems))

    configuration = configuration_from_dict(config)
    grid = load_grid(excel_path, sheet or config.get("sheet"))
    features = extract_features(grid, configuration)
    logger.info("Found %d features in %s", len(features), excel_path)

    # A selection left empty in the config is switched off.
    selections = {
        name: expand_selection(selection, features)
        for name, selection in (config.get("selections") or {}).items()
        if selection is not None
    }
    analysis = analyze_variations(
        grid, configuration, selections,
        label_style=label_style or config.get("label_style", "letter"),
        palette=SELECTION_PALETTES,
    )
    analysis = relabel_all(analysis, config.get("renames"))
    for name in analysis.selections():
        logger.info("  %s: %d groups", name, len(analysis.groups_for(name)))
    return grid, configuration, analysis


def _cmd_features(args):
    config = resolve_config(args.excel_file, args.config, args.config_sheet)
    configuration = configuration_from_dict(config)
    grid = load_grid(args.excel_file, args.sheet or config.get("sheet"))
    for feature in extract_features(grid, configuration):
        print(feature.name)
        for item in feature.items:
            print(f"  - {item.name}")


def _cmd_analyze(args):
    config = resolve_config(args.excel_file, args.config, args.config_sheet)
    grid, configuration, analysis = run_analysis(
        args.excel_file, config, sheet=args.sheet, label_style=args.labels)

    if analysis.is_empty():
        logger.warning("No data columns to group")

    output_path = args.output
    if output_path is None:
        out_dir = os.path.join(os.path.dirname(args.excel_file) or ".", "output")
        output_path = os.path.join(out_dir, "variation_analysis.xlsx")

    write_workbook(
        output_path,
        {
            "Variation": export_grid(grid, analysis, configuration, with_labels=True),
            "Summary": summary_rows(analysis),
        },
        fills={"Variation": export_fills(grid, analysis, with_labels=True)},
        header_sheets=("Summary",),
    )
    print(f"Generated variation workbook: {output_path}")
    return output_path


def _cmd_summary(args):
    config = resolve_config(args.excel_file, args.config, args.config_sheet)
    _grid, _configuration, analysis = run_analysis(
        args.excel_file, config, sheet=args.sheet, label_style=args.labels)
    frame = summary_frame(analysis)
    print(frame.to_string(index=False) if not frame.empty else "(no groups)")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Group specification-sheet columns by their feature patterns"
    )
    parser.add_argument("--log-level", default="INFO",
                        help="Logging level (default: INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p):
        p.add_argument("excel_file", help="Path to the specification workbook (.xlsx)")
        p.add_argument("--config", default=None,
                       help="Path to config YAML file")
        p.add_argument("--config-sheet", default=None,
                       help="Read configuration from this sheet instead of YAML")
        p.add_argument("--sheet", default=None,
                       help="Sheet to analyse (default: config 'sheet' or the first)")

    p_feat = sub.add_parser("features", help="List the feature / item tree")
    add_common(p_feat)

    for name, help_text in (("analyze", "Write the annotated variation workbook"),
                            ("summary", "Print the per-group summary")):
        p = sub.add_parser(name, help=help_text)
        add_common(p)
        p.add_argument("--labels", choices=["letter", "number"], default=None,
                       help="Group id style (default: config 'label_style')")
        if name == "analyze":
            p.add_argument("--output", default=None,
                           help="Output path (default: ./output/variation_analysis.xlsx)")
    return parser


_COMMANDS = {
    "features": _cmd_features,
    "analyze": _cmd_analyze,
    "summary": _cmd_summary,
}


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if not os.path.exists(args.excel_file):
        logger.error(f"Excel file not found: {args.excel_file}")
        sys.exit(1)

    try:
        _COMMANDS[args.command](args)
    except VariationError as exc:
        logger.error(str(exc))
        sys.exit(2)


if __name__ == "__main__":
    main()
