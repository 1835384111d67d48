"""
Module containing configuration related to parsing ZMK sources, legend and key code
lookup tables for binding resolution, and the geometry of the compiled layout.
"""

from pydantic_settings import BaseSettings


class ParseConfig(BaseSettings, env_prefix="ZMK_LAYOUT_", extra="ignore"):
    """Configuration settings related to parsing ZMK sources and resolving bindings to legends."""

    # map raw binding strings to fixed legends and shortcut any further binding resolution
    # e.g. {"&bootloader": "BOOT"}
    raw_binding_map: dict[str, str] = {"&studio_unlock": "STUDIO"}

    # legend to output for transparent keys
    trans_legend: str = "▽"

    # prefix used for momentary layer keys, followed by the layer index
    momentary_layer_prefix: str = "MO"

    # prefix used for bluetooth keys, also the fallback legend for unrecognized commands
    bluetooth_prefix: str = "BT"

    # bluetooth command that selects a profile, its parameter is appended to `bluetooth_prefix`
    bluetooth_select_command: str = "BT_SEL"

    # convert &bt commands to their display forms
    bluetooth_legend_map: dict[str, str] = {
        "BT_SEL": "BT",
        "BT_CLR": "BT CLR",
        "BT_CLR_ALL": "BT CLR ALL",
        "BT_NXT": "BT →",
        "BT_PRV": "BT ←",
    }

    # display forms for behaviors without dedicated handling, keyed by behavior name without "&"
    # behaviors not in this map are displayed upper-cased
    behavior_legend_map: dict[str, str] = {"none": "✗"}

    # convert ZMK keycodes to their display forms, applied to the parameter of "&kp"
    zmk_keycode_map: dict[str, str] = {
        # numbers
        "N1": "1",
        "N2": "2",
        "N3": "3",
        "N4": "4",
        "N5": "5",
        "N6": "6",
        "N7": "7",
        "N8": "8",
        "N9": "9",
        "N0": "0",
        # letters
        **{chr(c): chr(c) for c in range(ord("A"), ord("Z") + 1)},
        # symbols and punctuation
        "GRAVE": "`",
        "MINUS": "-",
        "EQUAL": "=",
        "LBKT": "[",
        "RBKT": "]",
        "BSLH": "\\",
        "SEMI": ";",
        "APOS": "'",
        "COMMA": ",",
        "DOT": ".",
        "FSLH": "/",
        # editing and navigation
        "SPACE": "",
        "BSPC": "⌫",
        "TAB": "⇥",
        "RET": "↩",
        "ESC": "⎋",
        "DEL": "⌦",
        "HOME": "↖",
        "END": "↘",
        "PGUP": "⇞",
        "PGDN": "⇟",
        # modifiers
        "LSHFT": "⇧",
        "RSHFT": "⇧",
        "LCTRL": "⌃",
        "RCTRL": "⌃",
        "LALT": "⌥",
        "RALT": "⌥",
        "LGUI": "⌘",
        "RGUI": "⌘",
        "CAPS": "⇪",
        # arrows
        "LARW": "←",
        "DARW": "↓",
        "UARW": "↑",
        "RARW": "→",
        # function keys
        **{f"F{i}": f"F{i}" for i in range(1, 13)},
    }

    # additional or overriding entries for the platform key code table that ships with the package,
    # keyed by the ZMK keycode name used with "&kp"
    key_code_map: dict[str, int] = {}


class CompileConfig(BaseSettings, env_prefix="ZMK_LAYOUT_", extra="ignore"):
    """Configuration related to converting physical layout units into the output coordinate space."""

    # output units per centi-key unit, i.e. a 1u key (100 centi-key units) is 40 units wide
    scale: float = 0.4

    # padding added to the bounding size of the compiled layout
    padding: float = 20

    # bounding size of a compiled layout that has no keys
    default_width: float = 480
    default_height: float = 200


class Config(BaseSettings, env_prefix="ZMK_LAYOUT_"):
    """All configuration settings used for this module."""

    parse_config: ParseConfig = ParseConfig()
    compile_config: CompileConfig = CompileConfig()
