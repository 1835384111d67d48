"""
Given a ZMK physical layout definition (.dtsi) and a ZMK keymap (.keymap), compile
them into a keyboard model with key positions and legends, and print it as YAML
to standard output.
"""

import logging
import sys
from argparse import ArgumentParser, FileType, Namespace
from importlib.metadata import version
from pathlib import Path

import yaml

from zmk_layout import logger
from zmk_layout.binding import BindingResolver
from zmk_layout.config import Config
from zmk_layout.loader import load_layout
from zmk_layout.parse import ParseError, PhysicalLayoutParser, ZmkKeymapParser


def compile_layout(args: Namespace, config: Config) -> None:
    """Compile the physical layout and keymap files and dump the keyboard model to YAML."""
    model = load_layout(args.physical_layout, args.keymap, config, layout_name=args.layout_name)
    yaml.safe_dump(model.model_dump(), args.output, width=160, sort_keys=False, allow_unicode=True)


def parse(args: Namespace, config: Config) -> None:
    """Call the appropriate parser for given args and dump YAML representation of the parse to stdout."""
    if args.physical_layout:
        parsed = PhysicalLayoutParser(config.parse_config, layout_name=args.layout_name).parse(args.physical_layout)
    else:
        parsed = ZmkKeymapParser(config.parse_config).parse(args.keymap)

    yaml.safe_dump(
        parsed.model_dump(), args.output, width=160, sort_keys=False, default_flow_style=None, allow_unicode=True
    )


def resolve(args: Namespace, config: Config) -> None:
    """Print the legend and key code that each given binding resolves to."""
    resolver = BindingResolver(config.parse_config)
    for binding in args.bindings:
        resolved = resolver.resolve(binding)
        key_code = "" if resolved.key_code is None else f" ({resolved.key_code})"
        print(f"{binding} -> {resolved.legend!r}{key_code}", file=args.output)


def dump_config(args: Namespace, config: Config) -> None:
    """Dump the currently active config, either default or parsed from args."""
    yaml.safe_dump(config.model_dump(), args.output, sort_keys=False, allow_unicode=True)


def main() -> None:
    """Parse the configuration and run the requested command."""
    parser = ArgumentParser(description=__doc__)
    parser.add_argument("-v", "--version", action="version", version=version("zmk-layout"))
    parser.add_argument("-d", "--debug", action="store_true")
    parser.add_argument(
        "-c",
        "--config",
        help="A YAML file containing settings for parsing and compiling, "
        "default can be dumped using `dump-config` command and to be modified",
        type=FileType("rt", encoding="utf-8"),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_p = subparsers.add_parser("compile", help="compile a physical layout and keymap into a keyboard model")
    compile_p.add_argument(
        "-p",
        "--physical-layout",
        help="Path to file containing ZMK physical layout definition in devicetree format",
        type=Path,
        required=True,
    )
    compile_p.add_argument("-k", "--keymap", help="Path to ZMK *.keymap to compile", type=Path, required=True)
    compile_p.add_argument(
        "-l",
        "--layout-name",
        help="Label or node name of the physical layout to use. Use the first defined one if not specified",
    )
    compile_p.add_argument(
        "-o",
        "--output",
        help="Output to path instead of stdout",
        type=FileType("wt", encoding="utf-8"),
        default=sys.stdout,
    )

    parse_p = subparsers.add_parser("parse", help="parse a ZMK physical layout or keymap to YAML representation")
    srcs = parse_p.add_mutually_exclusive_group(required=True)
    srcs.add_argument(
        "-p",
        "--physical-layout",
        help="Path to ZMK physical layout definition to parse",
        type=FileType("rt", encoding="utf-8"),
    )
    srcs.add_argument("-k", "--keymap", help="Path to ZMK *.keymap to parse", type=FileType("rt", encoding="utf-8"))
    parse_p.add_argument("-l", "--layout-name", help="Label or node name of the physical layout to parse")
    parse_p.add_argument(
        "-o",
        "--output",
        help="Output to path instead of stdout",
        type=FileType("wt", encoding="utf-8"),
        default=sys.stdout,
    )

    resolve_p = subparsers.add_parser("resolve", help="print legends and key codes for ZMK bindings")
    resolve_p.add_argument("bindings", help='Bindings to resolve, e.g. "&kp GRAVE" "&mo 1"', nargs="+")
    resolve_p.add_argument(
        "-o",
        "--output",
        help="Output to path instead of stdout",
        type=FileType("wt", encoding="utf-8"),
        default=sys.stdout,
    )

    dump_p = subparsers.add_parser(
        "dump-config", help="dump default parse and compile config to stdout that can be passed to -c/--config option"
    )
    dump_p.add_argument(
        "-o",
        "--output",
        help="Output to path instead of stdout",
        type=FileType("wt", encoding="utf-8"),
        default=sys.stdout,
    )

    args = parser.parse_args()

    if args.debug:
        logger.setLevel(logging.DEBUG)

    config = Config.model_validate(yaml.safe_load(args.config)) if args.config else Config()

    try:
        match args.command:
            case "compile":
                compile_layout(args, config)
            case "parse":
                parse(args, config)
            case "resolve":
                resolve(args, config)
            case "dump-config":
                dump_config(args, config)
    except ParseError as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
