"""Module containing class to parse devicetree format ZMK keymaps."""

import logging
from pathlib import Path

from zmk_layout.dts import DeviceTree, DTNode
from zmk_layout.keymap import Keymap, Layer
from zmk_layout.parse.parse import DTSParser, NoLayersFound

logger = logging.getLogger(__name__)


class ZmkKeymapParser(DTSParser[Keymap]):
    """
    Parser for ZMK devicetree keymaps, extracting the raw bindings of every `foo_layer { ... }` node
    in declaration order. Bindings are kept as strings like "&kp Q" for later resolution.
    """

    _layer_re = r"\w+_layer"
    _default_keymap_name = "keymap"

    @staticmethod
    def _get_display_name(node: DTNode) -> str:
        return node.name.removesuffix("_layer").replace("_", " ").title()

    def _get_layers(self, dts: DeviceTree) -> list[Layer]:
        layers = []
        for node in dts.find_nodes(self._layer_re):
            if not (bindings := node.get_phandle_array("bindings")):
                logger.warning('skipping layer "%s" because it has no bindings', node.name)
                continue
            layers.append(Layer(name=node.name, display_name=self._get_display_name(node), bindings=bindings))
            logger.debug("parsed layer %s with %d bindings", node.name, len(bindings))

        if not layers:
            raise NoLayersFound(f"Could not find any layers with bindings in {dts.file_name or 'input'}")
        return layers

    def _parse(self, dts: DeviceTree) -> Keymap:
        name = Path(dts.file_name).stem if dts.file_name else self._default_keymap_name
        return Keymap(name=name, layers=self._get_layers(dts))
