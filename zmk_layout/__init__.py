"""Compile ZMK physical layout and keymap devicetree sources into a renderable keyboard model."""

import logging

logging.basicConfig(format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)
