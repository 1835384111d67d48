"""
Module to resolve raw ZMK binding expressions such as "&kp Q" or "&mo 1" into
display legends and platform key codes.

Resolution is total: every expression yields a legend, unrecognized behaviors
and keycodes degrade to a textual fallback rather than an error.
"""

import logging
from enum import Enum
from functools import cache
from pathlib import Path

import yaml
from pydantic import BaseModel

from zmk_layout.config import ParseConfig
from zmk_layout.keymap import ResolvedBinding

logger = logging.getLogger(__name__)

KEY_CODES_PATH = Path(__file__).parent / "resources" / "macos_keycodes.yaml"

BEHAVIOR_MARKER = "&"
TRANS_BINDING = "&trans"


class BehaviorKind(Enum):
    """Kinds of binding expressions that get dedicated legend handling, with OTHER as the catch-all."""

    EMPTY = "empty"
    TRANSPARENT = "transparent"
    KEY_PRESS = "key_press"
    MOMENTARY_LAYER = "momentary_layer"
    BLUETOOTH = "bluetooth"
    LITERAL = "literal"
    OTHER = "other"


class BindingExpression(BaseModel, frozen=True):
    """
    A binding split into its behavior reference (e.g. "&kp") and parameters (e.g. ("Q",)).
    Text that does not start with a behavior marker is kept whole as a literal in `behavior`.
    """

    behavior: str = ""
    params: tuple[str, ...] = ()

    @classmethod
    def from_str(cls, binding: str) -> "BindingExpression":
        """Parse a raw binding string by splitting on whitespace."""
        match binding.split():
            case []:
                return cls()
            case [behavior, *params] if behavior.startswith(BEHAVIOR_MARKER):
                return cls(behavior=behavior, params=tuple(params))
        return cls(behavior=binding.strip())

    @property
    def name(self) -> str:
        """Behavior name without the marker, e.g. "kp"."""
        return self.behavior.removeprefix(BEHAVIOR_MARKER)

    @property
    def raw(self) -> str:
        """Normalized string form of the expression."""
        return " ".join((self.behavior, *self.params)).strip()

    @property
    def kind(self) -> BehaviorKind:  # pylint: disable=too-many-return-statements
        """Classify the expression for binding resolution."""
        if not self.behavior:
            return BehaviorKind.EMPTY
        if not self.behavior.startswith(BEHAVIOR_MARKER):
            return BehaviorKind.LITERAL
        match self.behavior, self.params:
            case "&trans", ():
                return BehaviorKind.TRANSPARENT
            case "&kp", (_, *_):
                return BehaviorKind.KEY_PRESS
            case "&mo", (layer, *_) if layer.isdigit():
                return BehaviorKind.MOMENTARY_LAYER
            case "&bt", _:
                return BehaviorKind.BLUETOOTH
        return BehaviorKind.OTHER

    def __str__(self) -> str:
        return self.raw


@cache
def _get_key_codes() -> dict[str, int]:
    with open(KEY_CODES_PATH, "rb") as f:
        return yaml.safe_load(f)


class BindingResolver:
    """Map binding expressions to legends and platform key codes, as configured by ParseConfig."""

    def __init__(self, config: ParseConfig):
        self.cfg = config
        self.key_codes = _get_key_codes() | self.cfg.key_code_map

    def resolve(self, binding: str) -> ResolvedBinding:
        """Resolve a binding into its legend and key code."""
        return ResolvedBinding(legend=self.legend(binding), key_code=self.key_code(binding))

    def legend(self, binding: str) -> str:  # pylint: disable=too-many-return-statements
        """Return the display legend for a binding, never failing."""
        if (mapped := self.cfg.raw_binding_map.get(binding.strip())) is not None:
            return mapped

        expr = BindingExpression.from_str(binding)
        match expr.kind, expr.params:
            case BehaviorKind.EMPTY, _:
                return ""
            case BehaviorKind.TRANSPARENT, _:
                return self.cfg.trans_legend
            case BehaviorKind.KEY_PRESS, params:
                key = " ".join(params)
                return self.cfg.zmk_keycode_map.get(key, key)
            case BehaviorKind.MOMENTARY_LAYER, (layer, *_):
                return f"{self.cfg.momentary_layer_prefix}{layer}"
            case BehaviorKind.BLUETOOTH, (command, device, *_) if command == self.cfg.bluetooth_select_command:
                return f"{self.cfg.bluetooth_prefix}{device}"
            case BehaviorKind.BLUETOOTH, (command, *_):
                return self.cfg.bluetooth_legend_map.get(command, self.cfg.bluetooth_prefix)
            case BehaviorKind.BLUETOOTH, _:
                return self.cfg.bluetooth_prefix
            case BehaviorKind.LITERAL, _:
                return expr.behavior

        logger.debug("no dedicated handling for behavior %s, using its name as legend", expr.behavior)
        legend = self.cfg.behavior_legend_map.get(expr.name, expr.name.upper())
        return legend + expr.params[0] if expr.params else legend

    def key_code(self, binding: str) -> int | None:
        """Return the platform key code for "&kp" bindings of known keys, None otherwise."""
        expr = BindingExpression.from_str(binding)
        if expr.kind is BehaviorKind.KEY_PRESS and len(expr.params) == 1:
            return self.key_codes.get(expr.params[0])
        return None
