from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..config import ConvertConfig
from ..converter import ConversionNote, convert_with_changes

log = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    path: Path
    target: Path
    edits: int = 0
    notes: List[ConversionNote] = field(default_factory=list)
    changed: bool = False
    written: bool = False
    output: str = ""


def target_path_for(path: Path, config: ConvertConfig, *, root: Optional[Path] = None, out_dir: Optional[Path] = None) -> Path:
    target = path.with_suffix(config.target_suffix)
    if out_dir is None:
        return target
    relative = path.relative_to(root) if root is not None and path.is_relative_to(root) else Path(path.name)
    return out_dir / relative.with_suffix(config.target_suffix)


def convert_file(
    path: Path,
    *,
    write: bool = False,
    out_dir: Optional[Path] = None,
    root: Optional[Path] = None,
    config: Optional[ConvertConfig] = None,
) -> ConversionResult:
    config = config or ConvertConfig()
    original = path.read_text(encoding="utf-8")
    converted, changes, notes = convert_with_changes(original, config)
    result = ConversionResult(
        path=path,
        target=target_path_for(path, config, root=root, out_dir=out_dir),
        edits=len(changes),
        notes=notes,
        changed=converted != original,
        output=converted,
    )
    for note in notes:
        log.warning("%s:%d:%d: %s", path, note.line, note.column, note.message)
    if write:
        result.target.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = result.target.with_suffix(result.target.suffix + ".tmp")
        tmp_path.write_text(converted, encoding="utf-8")
        tmp_path.replace(result.target)
        result.written = True
        log.info("Converted %s -> %s (%d edits)", path, result.target, result.edits)
    return result


def convert_path(
    root: Path,
    *,
    write: bool = False,
    out_dir: Optional[Path] = None,
    config: Optional[ConvertConfig] = None,
) -> List[ConversionResult]:
    config = config or ConvertConfig()
    results: List[ConversionResult] = []
    for file in sorted(root.rglob(f"*{config.source_suffix}")):
        results.append(convert_file(file, write=write, out_dir=out_dir, root=root, config=config))
    return results
