"""Module containing class to parse ZMK physical layout definitions in devicetree format."""

import logging
import re

from zmk_layout.config import ParseConfig
from zmk_layout.dts import DeviceTree, DTNode
from zmk_layout.parse.parse import DTSParser, InvalidKeyAttributes, NoPhysicalLayoutBlock
from zmk_layout.physical_layout import KeyPosition, PhysicalLayout

logger = logging.getLogger(__name__)


class PhysicalLayoutParser(DTSParser[PhysicalLayout]):
    """
    Parser for ZMK physical layouts, i.e. nodes like `foo_layout: foo_layout_0 { ... }` that
    contain a `keys` property made of `&key_physical_attrs` records.
    """

    _label_re = r"\w+_layout"
    _name_re = r"\w+_layout(?:_\d+)?"
    _ident_suffix_re = re.compile(r"_layout(?:_\d+)?$")
    _compatible = "zmk,physical-layout"
    _record_behavior = "&key_physical_attrs"
    _record_fields = ("width", "height", "x", "y", "rotation", "rotation_x", "rotation_y")

    def __init__(self, config: ParseConfig, layout_name: str | None = None):
        super().__init__(config)
        self.layout_name = layout_name

    def _find_layout_node(self, dts: DeviceTree) -> DTNode:
        nodes = dts.find_nodes(self._name_re, self._label_re)
        nodes += [node for node in dts.get_compatible_nodes(self._compatible) if node not in nodes]
        nodes.sort(key=lambda node: node.start)
        if not nodes:
            raise NoPhysicalLayoutBlock(
                f"No physical layout node like `foo_layout: foo_layout_0 {{ ... }}` found in {dts.file_name or 'input'}"
            )
        logger.debug("found these physical layouts in DTS: %s", [node.label or node.name for node in nodes])

        if self.layout_name is None:
            return nodes[0]
        for node in nodes:
            if self.layout_name in (node.label, node.name):
                return node
        raise NoPhysicalLayoutBlock(
            f'Could not find physical layout "{self.layout_name}", '
            f"available options are: {[node.label or node.name for node in nodes]}"
        )

    def _get_display_name(self, node: DTNode) -> str:
        if (display_name := node.get_string("display-name")) is not None:
            return display_name
        return self._ident_suffix_re.sub("", node.label or node.name).title()

    def _get_key_positions(self, node: DTNode) -> list[KeyPosition]:
        if (records := node.get_phandle_array("keys")) is None:
            raise InvalidKeyAttributes(f'No `keys` property found for physical layout "{node.label or node.name}"')

        keys: list[KeyPosition] = []
        for record in records:
            behavior, *cells = record.split()
            if behavior != self._record_behavior or len(cells) != len(self._record_fields):
                logger.warning('skipping unrecognized key record "%s" in physical layout', record)
                continue
            try:
                values = [int(cell.strip("()")) for cell in cells]
            except ValueError:
                logger.warning('skipping key record with non-integer attributes "%s" in physical layout', record)
                continue
            keys.append(KeyPosition(**dict(zip(self._record_fields, values)), index=len(keys)))

        if not keys:
            raise InvalidKeyAttributes(
                f'No valid `{self._record_behavior}` records found for physical layout "{node.label or node.name}"'
            )
        return keys

    def _parse(self, dts: DeviceTree) -> PhysicalLayout:
        node = self._find_layout_node(dts)
        return PhysicalLayout(
            name=node.label or node.name,
            display_name=self._get_display_name(node),
            keys=self._get_key_positions(node),
        )
