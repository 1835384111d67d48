"""
Module containing the base parser class for ZMK devicetree sources and the errors raised while parsing.
Do not use directly, use PhysicalLayoutParser or ZmkKeymapParser instead.
"""

import logging
from abc import ABC, abstractmethod
from io import TextIOWrapper
from typing import Generic, TypeVar

from zmk_layout.config import ParseConfig
from zmk_layout.dts import DeviceTree

logger = logging.getLogger(__name__)

ParsedT = TypeVar("ParsedT")


class ParseError(Exception):
    """Error type for exceptions that happen during parsing of ZMK sources."""


class FileUnavailable(ParseError):
    """A source file could not be read."""


class NoPhysicalLayoutBlock(ParseError):
    """No physical layout node was found in the physical layout source."""


class InvalidKeyAttributes(ParseError):
    """The physical layout node did not contain any valid key geometry records."""


class NoLayersFound(ParseError):
    """No layer with bindings was found in the keymap source."""


class DTSParser(ABC, Generic[ParsedT]):
    """Abstract base class for parsers that build a model out of a devicetree source."""

    def __init__(self, config: ParseConfig):
        self.cfg = config

    @abstractmethod
    def _parse(self, dts: DeviceTree) -> ParsedT:
        raise NotImplementedError

    def parse_str(self, in_str: str, file_name: str | None = None) -> ParsedT:
        """Strip comments from `in_str`, parse it into a DeviceTree and extract the model from it."""
        dts = DeviceTree(in_str, file_name)
        parsed = self._parse(dts)
        logger.debug("parsed %s: %s", file_name or "<string>", parsed)
        return parsed

    def parse(self, in_buf: TextIOWrapper) -> ParsedT:
        """Wrapper to call parser on a file handle."""
        return self.parse_str(in_buf.read(), in_buf.name)
