"""Shared ZMK sources and configuration for the test suite."""

import pytest

from zmk_layout.config import Config

TYPHON_DTSI = """\
#include <physical_layouts.dtsi>

/ {
    typhon_layout: typhon_layout_0 {
        compatible = "zmk,physical-layout";
        display-name = "Typhon";
        transform = <&default_transform>;
        kscan = <&kscan0>;

        /* Include vertical offsets of each column in key layout */
        keys
            // Left half keys
            = <&key_physical_attrs 100 100    0  50 0 0 0>, <&key_physical_attrs 100 100  100  50 0 0 0>, // top row
              <&key_physical_attrs 100 100    0 150 0 0 0>, <&key_physical_attrs 100 100  100 150 0 0 0>;
    };
};
"""

TEST_KEYMAP = """\
#include <behaviors.dtsi>
#include <dt-bindings/zmk/keys.h>
#include <dt-bindings/zmk/bt.h>

/ {
    keymap {
        compatible = "zmk,keymap";

        default_layer {
            // -----------------------------
            // | `  | 1  | 2  | 3  |
            // | TAB| Q  | W  | E  |
            bindings = <
            &kp GRAVE  &kp N1    &kp N2    &kp N3
            &kp TAB    &kp Q     &kp W     &kp E
            >;
        };

        lower_layer {
            /* bluetooth profiles
               on the top row */
            bindings = <
            &bt BT_SEL 0   &bt BT_SEL 1   &trans   &trans
            &trans         &trans         &trans   &trans
            >;
        };
    };
};
"""


@pytest.fixture
def config() -> Config:
    """Default configuration."""
    return Config()


@pytest.fixture
def typhon_dtsi() -> str:
    """Physical layout source with four 1u keys in two rows."""
    return TYPHON_DTSI


@pytest.fixture
def test_keymap() -> str:
    """Keymap source with a default and a lower layer of eight bindings each."""
    return TEST_KEYMAP
