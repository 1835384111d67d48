"""Submodule containing parsers for ZMK physical layout and keymap sources."""

from .parse import FileUnavailable, InvalidKeyAttributes, NoLayersFound, NoPhysicalLayoutBlock, ParseError
from .physical import PhysicalLayoutParser
from .zmk import ZmkKeymapParser

__all__ = [
    "FileUnavailable",
    "InvalidKeyAttributes",
    "NoLayersFound",
    "NoPhysicalLayoutBlock",
    "ParseError",
    "PhysicalLayoutParser",
    "ZmkKeymapParser",
]
