"""
Module containing the compiler that pairs each key of a physical layout with the binding at
the same position of the keymap's default layer, producing a renderable KeyboardLayoutModel.
"""

import logging

from zmk_layout.binding import TRANS_BINDING, BindingResolver
from zmk_layout.config import Config
from zmk_layout.keymap import ComposedKey, KeyboardLayoutModel, Keymap
from zmk_layout.physical_layout import PhysicalLayout

logger = logging.getLogger(__name__)


class LayoutCompiler:
    """
    Compile a physical layout and a keymap into a KeyboardLayoutModel.

    Keys and bindings are correlated purely by position: the key with index `i` gets the
    `i`th binding of the default layer. Keys without a binding are treated as transparent
    and bindings without a key are dropped, with a warning if the counts differ.
    """

    def __init__(self, config: Config):
        self.cfg = config.compile_config
        self.resolver = BindingResolver(config.parse_config)

    def _get_bindings(self, physical_layout: PhysicalLayout, keymap: Keymap) -> list[str]:
        if (default_layer := keymap.default_layer) is None:
            logger.warning('keymap "%s" has no layers, all keys will be transparent', keymap.name)
            return []
        if (n_bindings := len(default_layer)) != (n_keys := len(physical_layout)):
            logger.warning(
                'default layer "%s" has %d bindings but physical layout "%s" has %d keys, %s',
                default_layer.name,
                n_bindings,
                physical_layout.name,
                n_keys,
                "keys without bindings will be transparent" if n_bindings < n_keys else "extra bindings are ignored",
            )
        return default_layer.bindings

    def compile(self, physical_layout: PhysicalLayout, keymap: Keymap) -> KeyboardLayoutModel:
        """Resolve the default layer binding for each physical key and scale key frames to output units."""
        bindings = self._get_bindings(physical_layout, keymap)

        keys = []
        for ind, position in enumerate(physical_layout.keys):
            binding = bindings[ind] if ind < len(bindings) else TRANS_BINDING
            keys.append(
                ComposedKey(
                    position=position,
                    binding=binding,
                    resolved=self.resolver.resolve(binding),
                    frame=self.cfg.scale * position.frame,
                )
            )

        if keys:
            width = max(key.frame.max_x for key in keys) + self.cfg.padding
            height = max(key.frame.max_y for key in keys) + self.cfg.padding
        else:
            width, height = self.cfg.default_width, self.cfg.default_height
        logger.debug("compiled %d keys for %s, bounding size %sx%s", len(keys), physical_layout.name, width, height)

        return KeyboardLayoutModel(
            name=physical_layout.name,
            display_name=physical_layout.display_name,
            keymap_name=keymap.name,
            layer_names=[layer.display_name for layer in keymap.layers],
            keys=keys,
            width=width,
            height=height,
        )
