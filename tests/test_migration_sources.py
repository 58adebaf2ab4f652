import logging
from pathlib import Path

from as3ts.config import ConvertConfig
from as3ts.migration.sources import convert_file, convert_path, target_path_for

HERO = (
    "package game {\n"
    "    public class Hero {\n"
    "        public var hp:int;\n"
    "    }\n"
    "}\n"
)


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_dry_run_does_not_write(tmp_path: Path):
    source = _write(tmp_path / "Hero.as", HERO)
    result = convert_file(source)
    assert result.changed
    assert result.edits > 0
    assert not result.written
    assert not (tmp_path / "Hero.ts").exists()
    assert "export class Hero {" in result.output
    assert source.read_text(encoding="utf-8") == HERO


def test_write_places_target_next_to_source(tmp_path: Path):
    source = _write(tmp_path / "Hero.as", HERO)
    result = convert_file(source, write=True)
    target = tmp_path / "Hero.ts"
    assert result.written
    assert result.target == target
    assert target.read_text(encoding="utf-8") == result.output
    assert "public hp:number;" in result.output
    assert not (tmp_path / "Hero.ts.tmp").exists()


def test_convert_path_mirrors_tree_under_out_dir(tmp_path: Path):
    src = tmp_path / "src"
    out = tmp_path / "out"
    _write(src / "game" / "Hero.as", HERO)
    _write(src / "game" / "units" / "Unit.as", "package game.units { public class Unit {} }")
    _write(src / "README.txt", "not a source")
    results = convert_path(src, write=True, out_dir=out)
    assert [r.path.name for r in results] == ["Hero.as", "Unit.as"]
    assert (out / "game" / "Hero.ts").exists()
    assert (out / "game" / "units" / "Unit.ts").read_text(encoding="utf-8") == "export class Unit {} "


def test_custom_suffixes(tmp_path: Path):
    config = ConvertConfig(source_suffix=".as3", target_suffix=".mts")
    _write(tmp_path / "A.as3", "var a:int;")
    _write(tmp_path / "B.as", "var b:int;")
    results = convert_path(tmp_path, config=config)
    assert len(results) == 1
    assert results[0].target == tmp_path / "A.mts"
    assert target_path_for(tmp_path / "x" / "C.as3", config, root=tmp_path, out_dir=tmp_path / "o") == (
        tmp_path / "o" / "x" / "C.mts"
    )


def test_review_notes_are_logged(tmp_path: Path, caplog):
    source = _write(tmp_path / "Debug.as", 'package p {\n    include "debug.as";\n}\n')
    with caplog.at_level(logging.WARNING, logger="as3ts.migration.sources"):
        result = convert_file(source)
    assert len(result.notes) == 1
    assert "include directive commented out" in caplog.text
    assert "Debug.as:2:5" in caplog.text
