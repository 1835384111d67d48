"""
Module to load a compiled keyboard layout from a ZMK physical layout file and keymap file,
optionally falling back to a given layout if either of them cannot be parsed.
"""

import logging
from pathlib import Path

from zmk_layout.compile import LayoutCompiler
from zmk_layout.config import Config
from zmk_layout.keymap import KeyboardLayoutModel
from zmk_layout.parse import FileUnavailable, ParseError, PhysicalLayoutParser, ZmkKeymapParser

logger = logging.getLogger(__name__)


def read_source(path: Path) -> str:
    """Read a UTF-8 source file, raising FileUnavailable if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileUnavailable(f"Could not read {path}: {exc}") from exc


def load_layout(
    physical_layout_path: Path,
    keymap_path: Path,
    config: Config | None = None,
    layout_name: str | None = None,
    fallback: KeyboardLayoutModel | None = None,
) -> KeyboardLayoutModel:
    """
    Read, parse and compile the given physical layout (.dtsi) and keymap (.keymap) files.
    If parsing fails and a `fallback` is provided, log the error and return it instead.
    """
    config = config if config is not None else Config()
    try:
        physical_layout = PhysicalLayoutParser(config.parse_config, layout_name=layout_name).parse_str(
            read_source(physical_layout_path), str(physical_layout_path)
        )
        keymap = ZmkKeymapParser(config.parse_config).parse_str(read_source(keymap_path), str(keymap_path))
    except ParseError as exc:
        if fallback is None:
            raise
        logger.error("failed to load layout, using fallback %s: %s", fallback.name, exc)
        return fallback

    return LayoutCompiler(config).compile(physical_layout, keymap)
