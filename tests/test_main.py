import sys

import pytest
import yaml

from zmk_layout.__main__ import main


@pytest.fixture
def sources(tmp_path, typhon_dtsi, test_keymap):
    dtsi_path = tmp_path / "typhon.dtsi"
    keymap_path = tmp_path / "typhon.keymap"
    dtsi_path.write_text(typhon_dtsi, encoding="utf-8")
    keymap_path.write_text(test_keymap, encoding="utf-8")
    return dtsi_path, keymap_path


def run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["zmk-layout", *map(str, args)])
    main()


def test_compile(monkeypatch, capsys, sources):
    run(monkeypatch, "compile", "-p", sources[0], "-k", sources[1])
    out = yaml.safe_load(capsys.readouterr().out)
    assert out["display_name"] == "Typhon"
    assert [key["resolved"]["legend"] for key in out["keys"]] == ["`", "1", "2", "3"]
    assert out["keys"][1]["frame"] == pytest.approx({"x": 40, "y": 20, "width": 40, "height": 40})


def test_compile_to_file(monkeypatch, tmp_path, sources):
    out_path = tmp_path / "model.yaml"
    run(monkeypatch, "compile", "-p", sources[0], "-k", sources[1], "-o", out_path)
    with open(out_path, encoding="utf-8") as f:
        assert len(yaml.safe_load(f)["keys"]) == 4


def test_parse_keymap(monkeypatch, capsys, sources):
    run(monkeypatch, "parse", "-k", sources[1])
    out = yaml.safe_load(capsys.readouterr().out)
    assert out["name"] == "typhon"
    assert [layer["name"] for layer in out["layers"]] == ["default_layer", "lower_layer"]


def test_parse_physical_layout(monkeypatch, capsys, sources):
    run(monkeypatch, "parse", "-p", sources[0])
    out = yaml.safe_load(capsys.readouterr().out)
    assert out["display_name"] == "Typhon"
    assert [key["index"] for key in out["keys"]] == [0, 1, 2, 3]


def test_resolve(monkeypatch, capsys):
    run(monkeypatch, "resolve", "&kp GRAVE", "&mo 1", "&kp A")
    assert capsys.readouterr().out.splitlines() == ["&kp GRAVE -> '`' (50)", "&mo 1 -> 'MO1'", "&kp A -> 'A' (0)"]


def test_config_file(monkeypatch, capsys, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("parse_config:\n  trans_legend: T\n", encoding="utf-8")
    run(monkeypatch, "-c", config_path, "resolve", "&trans")
    assert capsys.readouterr().out.strip() == "&trans -> 'T'"


def test_dump_config(monkeypatch, capsys):
    run(monkeypatch, "dump-config")
    out = yaml.safe_load(capsys.readouterr().out)
    assert out["compile_config"]["scale"] == 0.4
    assert out["parse_config"]["trans_legend"] == "▽"


def test_parse_error_exits(monkeypatch, capsys, tmp_path, sources):
    bad_path = tmp_path / "bad.dtsi"
    bad_path.write_text("/ { };", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        run(monkeypatch, "compile", "-p", bad_path, "-k", sources[1])
    assert exc_info.value.code == 1
