"""
Command-line interface for as3ts.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ConvertConfig, log_level_from_env
from .errors import As3tsError
from .migration import sources as source_migration
from .version import __version__


def build_cli_parser() -> argparse.ArgumentParser:
    cli = argparse.ArgumentParser(prog="as3ts", description="Convert ActionScript 3 sources to TypeScript")
    cli.add_argument(
        "--version",
        action="version",
        version=f"as3ts {__version__} (Python {sys.version.split()[0]})",
    )
    cli.add_argument("-v", "--verbose", action="store_true", help="Log scope transitions and per-file progress")
    cli.add_argument(
        "--config",
        dest="config_root",
        type=Path,
        help="Directory containing as3ts.toml (defaults to the current directory)",
    )
    sub = cli.add_subparsers(dest="command", required=True)

    convert_cmd = sub.add_parser("convert", help="Convert .as files or directories")
    convert_cmd.add_argument("paths", nargs="+", type=Path, help="Files or directories containing .as sources")
    convert_cmd.add_argument("--write", action="store_true", help="Write .ts files (dry run by default)")
    convert_cmd.add_argument("--out", dest="out_dir", type=Path, help="Write converted files under this directory")
    convert_cmd.add_argument("--stdout", action="store_true", help="Print the converted text of a single file")

    serve_cmd = sub.add_parser("serve", help="Start the conversion HTTP API")
    serve_cmd.add_argument("--host", default="127.0.0.1")
    serve_cmd.add_argument("--port", type=int, default=8000)
    serve_cmd.add_argument("--dry-run", action="store_true", help="Build app but do not start server")
    return cli


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else log_level_from_env()
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _run_convert(args: argparse.Namespace, config: ConvertConfig) -> None:
    if args.stdout:
        if len(args.paths) != 1 or not args.paths[0].is_file():
            raise SystemExit("--stdout needs exactly one source file")
        result = source_migration.convert_file(args.paths[0], config=config)
        sys.stdout.write(result.output)
        return

    results = []
    for target in args.paths:
        if not target.exists():
            print(f"Path '{target}' does not exist.", file=sys.stderr)
            continue
        if target.is_file():
            results.append(
                source_migration.convert_file(target, write=args.write, out_dir=args.out_dir, config=config)
            )
        else:
            results.extend(
                source_migration.convert_path(target, write=args.write, out_dir=args.out_dir, config=config)
            )
    edits = sum(r.edits for r in results)
    notes = sum(len(r.notes) for r in results)
    if args.write:
        print(f"Converted {len(results)} file(s). Edits: {edits}, review notes: {notes}.")
    else:
        print("Dry run. Re-run with --write to apply changes.")
    for r in results:
        print(f"- {r.path} -> {r.target}: edits={r.edits}")
        for note in r.notes:
            print(f"  {note.line}:{note.column} {note.message}")


def main(argv: list[str] | None = None) -> None:
    cli = build_cli_parser()
    args = cli.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = ConvertConfig.load(args.config_root or Path.cwd())
    except As3tsError as exc:
        raise SystemExit(str(exc)) from exc

    if args.command == "convert":
        try:
            _run_convert(args, config)
        except As3tsError as exc:
            raise SystemExit(str(exc)) from exc
        return

    if args.command == "serve":
        from .server import create_app

        app = create_app(config)
        if args.dry_run:
            print(
                json.dumps(
                    {"status": "ready", "host": args.host, "port": args.port},
                    indent=2,
                )
            )
            return
        import uvicorn

        uvicorn.run(app, host=args.host, port=args.port)
        return


if __name__ == "__main__":  # pragma: no cover
    main()
