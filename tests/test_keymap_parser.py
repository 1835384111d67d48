import logging

import pytest

from zmk_layout.parse import NoLayersFound, ZmkKeymapParser


@pytest.fixture
def parser(config):
    return ZmkKeymapParser(config.parse_config)


def test_parse_test_keymap(parser, test_keymap):
    keymap = parser.parse_str(test_keymap, "test.keymap")

    assert keymap.name == "test"
    assert len(keymap.layers) == 2

    default_layer = keymap.default_layer
    assert default_layer is keymap.layers[0]
    assert default_layer.name == "default_layer"
    assert default_layer.display_name == "Default"
    assert len(default_layer.bindings) == 8
    assert default_layer.bindings[:2] == ["&kp GRAVE", "&kp N1"]
    assert default_layer.bindings[4] == "&kp TAB"

    lower_layer = keymap.layers[1]
    assert lower_layer.name == "lower_layer"
    assert lower_layer.display_name == "Lower"
    assert len(lower_layer.bindings) == 8
    assert lower_layer.bindings[0] == "&bt BT_SEL 0"
    assert lower_layer.bindings[2] == "&trans"


@pytest.mark.parametrize("n_layers,n_bindings", [(1, 1), (3, 5), (4, 42)])
def test_layer_and_binding_counts(parser, n_layers, n_bindings):
    layers = "\n".join(
        f"layer{i}_layer {{ bindings = <{'  '.join(f'&kp N{j % 10}' for j in range(n_bindings))}>; }};"
        for i in range(n_layers)
    )
    keymap = parser.parse_str(f"/ {{ keymap {{ {layers} }}; }};")
    assert len(keymap.layers) == n_layers
    assert all(len(layer.bindings) == n_bindings for layer in keymap.layers)


def test_whitespace_and_parameters_are_normalized(parser):
    keymap = parser.parse_str(
        "/ { keymap { base_layer { bindings = <\n\t&mt   LSHFT\n A    &kp\tB\n\n&bt BT_SEL  2 >; }; }; };"
    )
    assert keymap.layers[0].bindings == ["&mt LSHFT A", "&kp B", "&bt BT_SEL 2"]


def test_display_name_derivation(parser):
    keymap = parser.parse_str(
        """
        / {
            keymap {
                num_pad_layer { bindings = <&kp N1>; };
                fn_layer { display-name = "Function"; bindings = <&kp F1>; };
                nav_layer { label = "NAV"; bindings = <&kp LARW>; };
            };
        };
        """
    )
    # display-name and label properties do not override the derived name
    assert [layer.display_name for layer in keymap.layers] == ["Num Pad", "Fn", "Nav"]
    assert keymap.layer("Fn") is keymap.layers[1]
    assert keymap.layer("Function") is None
    assert keymap.layer("nav_layer") is keymap.layers[2]
    assert keymap.layer("missing") is None


def test_sensor_bindings_are_not_layer_bindings(parser):
    keymap = parser.parse_str(
        """
        / {
            keymap {
                default_layer {
                    bindings = <&kp A &kp B>;
                    sensor-bindings = <&inc_dec_kp C_VOL_UP C_VOL_DN>;
                };
            };
        };
        """
    )
    assert keymap.layers[0].bindings == ["&kp A", "&kp B"]


def test_empty_layers_are_skipped(parser, caplog):
    with caplog.at_level(logging.WARNING):
        keymap = parser.parse_str(
            "/ { keymap { empty_layer { bindings = < >; }; other_layer { bindings = <&kp Q>; }; }; };"
        )
    assert [layer.name for layer in keymap.layers] == ["other_layer"]
    assert "empty_layer" in caplog.text


def test_name_without_file(parser):
    assert parser.parse_str("/ { keymap { a_layer { bindings = <&kp A>; }; }; };").name == "keymap"


def test_parse_file_handle(parser, test_keymap, tmp_path):
    path = tmp_path / "corne.keymap"
    path.write_text(test_keymap, encoding="utf-8")
    with open(path, encoding="utf-8") as f:
        keymap = parser.parse(f)
    assert keymap.name == "corne"


def test_no_layer_blocks(parser):
    with pytest.raises(NoLayersFound):
        parser.parse_str('/ { keymap { compatible = "zmk,keymap"; }; };', "empty.keymap")


def test_all_layers_empty(parser):
    with pytest.raises(NoLayersFound):
        parser.parse_str("/ { keymap { a_layer { bindings = <>; }; b_layer { }; }; };")


def test_commented_out_layer(parser):
    with pytest.raises(NoLayersFound):
        parser.parse_str(
            "/ { keymap {\n/*\n a_layer { bindings = <&kp A>; };\n*/\n // b_layer { bindings = <&kp B>; };\n }; };"
        )
