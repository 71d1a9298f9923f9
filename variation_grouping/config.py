"""
Configuration loading and validation.

A configuration is kept as a plain dict (the YAML shape) until the engine
needs it; :func:`configuration_from_dict` then turns the spreadsheet
notation (column letters, 1-based start row) into a :class:`Configuration`
of zero-based indices.
"""

import copy
import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

import yaml

from .codec import column_position
from .errors import InvalidColumnLetter, InvalidConfiguration

logger = logging.getLogger(__name__)

LABEL_STYLES = ("letter", "number")

_COLUMN_RE = re.compile(r"^[A-Za-z]+$")

DEFAULTS = {
    "feature_column": "M",
    "item_column": None,
    "start_row": 19,
    "data_start_column": "V",
    "label_style": "letter",
    "sheet": None,
    "selections": {},
    "renames": {},
}

# (name, use for MAP, use for VARIANT)
_DEFAULT_FEATURES = [
    ("STEERING GEAR BOX", False, True),
    ("TIRE SIZE", True, True),
    ("DRIVE TYPE", True, True),
    ("TRANSMISSION", True, True),
    ("HIGH ROAD CLEARANCE", False, True),
    ("ENGINE MODEL", False, True),
]


@dataclass(frozen=True)
class Configuration:
    """Grid layout, all indices zero-based."""
    feature_column: int
    start_row: int
    data_start_column: int
    item_column: Optional[int] = None

    def __post_init__(self):
        for name in ("feature_column", "start_row", "data_start_column"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidConfiguration(f"{name} must be an index >= 0, got {value!r}")
        if self.item_column is None:
            object.__setattr__(self, "item_column", self.feature_column + 1)
        elif (isinstance(self.item_column, bool) or not isinstance(self.item_column, int)
              or self.item_column < 0):
            raise InvalidConfiguration(
                f"item_column must be an index >= 0, got {self.item_column!r}")

    @classmethod
    def from_letters(cls, feature_column, start_row, data_start_column,
                     item_column=None):
        """Build from spreadsheet notation; *start_row* is the 1-based row number."""
        row = _parse_row_number(start_row)
        if row < 1:
            raise InvalidConfiguration(f"start_row must be positive, got {start_row!r}")
        return cls(
            feature_column=_letters(feature_column, "feature_column"),
            start_row=row - 1,
            data_start_column=_letters(data_start_column, "data_start_column"),
            item_column=(None if item_column in (None, "")
                         else _letters(item_column, "item_column")),
        )


def _letters(value, name):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidConfiguration(f"Missing required column: {name}")
    try:
        return column_position(str(value).strip())
    except InvalidColumnLetter as exc:
        raise InvalidColumnLetter(f"{name}: {exc}") from exc


def _parse_row_number(value):
    if isinstance(value, bool):
        raise InvalidConfiguration(f"Invalid start_row: {value!r}")
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        raise InvalidConfiguration(f"Invalid start_row: {value!r}") from None


def load_config(config_path):
    """Load configuration from a YAML file, merged onto :data:`DEFAULTS`."""
    config = copy.deepcopy(DEFAULTS)
    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
        if not isinstance(user_config, dict):
            raise InvalidConfiguration(f"Config file must hold a mapping: {config_path}")
        config.update(user_config)
        logger.debug("Loaded config from %s", config_path)
    elif config_path:
        logger.warning("Config file not found, using defaults: %s", config_path)
    return config


def configuration_from_dict(config):
    """Build a :class:`Configuration` from a config dict."""
    return Configuration.from_letters(
        feature_column=config.get("feature_column"),
        start_row=config.get("start_row"),
        data_start_column=config.get("data_start_column"),
        item_column=config.get("item_column"),
    )


def validate_configuration(config):
    """Return a list of human-readable problems; empty means valid."""
    errors = []

    selections = config.get("selections") or {}
    if not isinstance(selections, dict):
        errors.append("Invalid selections")
        selections = {}
    elif not any(selections.values()):
        errors.append("No features defined")
    for name, selection in selections.items():
        if selection is not None and not isinstance(selection, dict):
            errors.append(f"Invalid selection: {name}")

    for key, label in (("feature_column", "feature column"),
                       ("data_start_column", "data start column")):
        if not _is_column(config.get(key)):
            errors.append(f"Invalid {label}")

    item_column = config.get("item_column")
    if item_column not in (None, "") and not _is_column(item_column):
        errors.append("Invalid item column")

    try:
        if _parse_row_number(config.get("start_row")) < 1:
            errors.append("Invalid start row")
    except InvalidConfiguration:
        errors.append("Invalid start row")

    if config.get("label_style", "letter") not in LABEL_STYLES:
        errors.append("Invalid label style")

    return errors


def _is_column(value):
    return isinstance(value, str) and bool(_COLUMN_RE.match(value.strip()))


def _is_flag(value):
    return value == 1 or value == "1"


def parse_configuration_sheet(rows):
    """Parse the configuration sheet layout into a config dict.

    From row 2 onwards column A holds a feature name, B and C its MAP and
    VARIANT flags (``1``).  Row 2, columns D/E/F hold the feature column,
    start row and data start column.  Selected features take all items.
    """
    def cell(r, c):
        if r >= len(rows) or rows[r] is None or c >= len(rows[r]):
            return None
        return rows[r][c]

    map_selection = {}
    variant_selection = {}
    for r in range(1, len(rows)):
        name = str(cell(r, 0) if cell(r, 0) is not None else "").strip()
        if not name:
            break
        if _is_flag(cell(r, 1)):
            map_selection[name] = None
        if _is_flag(cell(r, 2)):
            variant_selection[name] = None

    config = copy.deepcopy(DEFAULTS)
    config["feature_column"] = str(cell(1, 3) or DEFAULTS["feature_column"]).strip()
    config["start_row"] = _parse_row_number(cell(1, 4) or DEFAULTS["start_row"])
    config["data_start_column"] = str(cell(1, 5) or DEFAULTS["data_start_column"]).strip()
    config["selections"] = {"MAP": map_selection, "VARIANT": variant_selection}
    return config


def default_configuration():
    """Return the stock configuration for vehicle specification sheets."""
    config = copy.deepcopy(DEFAULTS)
    config["selections"] = {
        "MAP": {name: None for name, use_map, _ in _DEFAULT_FEATURES if use_map},
        "VARIANT": {name: None for name, _, use_variant in _DEFAULT_FEATURES
                    if use_variant},
    }
    return config
