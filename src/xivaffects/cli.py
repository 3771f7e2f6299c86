"""
CLI entry point for xivaffects.

Usage:
    xivaffects parse <path>...          Show the descriptor for archive paths
    xivaffects build                    Build the affects index from game data
    xivaffects resolve <path>...        Show what archive paths affect
    xivaffects config                   Show the effective configuration
"""

import argparse
import logging
import sys
from pathlib import Path

from xivaffects import __version__
from xivaffects.config import AffectsConfig, ConfigError, write_default_config

logger = logging.getLogger(__name__)


def _load_config(args) -> AffectsConfig:
    config = AffectsConfig(Path(args.config) if args.config else None)
    config.override(
        sheets_path=getattr(args, "sheets", None),
        archive_path=getattr(args, "archive", None),
        bnpc_path=getattr(args, "bnpc", None),
        index_path=getattr(args, "index", None),
    )
    if getattr(args, "pretty", False):
        config.override(pretty=True)
    return config


def cmd_parse(args):
    """Parse archive paths and print their descriptors."""
    from xivaffects.parser import PathParseError, parse_path

    status = 0
    for path in args.paths:
        try:
            descriptor = parse_path(path)
        except PathParseError as e:
            print(f"{path}: {e}", file=sys.stderr)
            status = 1
            continue
        print(f"{path}: {descriptor!r}")
    return status


def cmd_build(args):
    """Build the affects index and write it to disk."""
    from xivaffects.builder import IndexBuilder
    from xivaffects.index import IndexBuildError
    from xivaffects.sheets import (
        BNpcLinkError,
        CsvSheetProvider,
        DirectoryArchive,
        SheetNotFound,
        load_bnpc_links,
    )

    config = _load_config(args)

    links = []
    if config.bnpc_path.exists():
        try:
            links = load_bnpc_links(config.bnpc_path)
        except BNpcLinkError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        logger.warning(f"No bnpc links at {config.bnpc_path}; battle NPCs will be skipped")

    builder = IndexBuilder(
        CsvSheetProvider(config.sheets_path),
        DirectoryArchive(config.archive_path),
        links,
    )
    try:
        index = builder.build()
    except (IndexBuildError, SheetNotFound) as e:
        print(f"Build failed: {e}", file=sys.stderr)
        return 1

    config.index_path.parent.mkdir(parents=True, exist_ok=True)
    index.save(config.index_path, pretty=config.pretty)
    print(f"Wrote {config.index_path} ({len(index.names)} names)")
    return 0


def cmd_resolve(args):
    """Print the entities affected by archive paths."""
    from xivaffects.index import AffectsIndex, IndexFormatError
    from xivaffects.resolver import format_affects, resolve_path

    config = _load_config(args)
    try:
        index = AffectsIndex.load(config.index_path)
    except (OSError, IndexFormatError) as e:
        print(f"Could not load index {config.index_path}: {e}", file=sys.stderr)
        return 1

    for path in args.paths:
        lines = format_affects(resolve_path(index, path))
        print(path)
        if not lines:
            print("  (nothing)")
        for line in lines:
            print(f"  {line}")
    return 0


def cmd_config(args):
    """Show the effective configuration, or write a default file."""
    if args.init:
        path = write_default_config(Path(args.init) if args.init != "-" else None)
        print(f"Wrote {path}")
        return 0

    config = _load_config(args)
    for key, value in config.to_dict().items():
        print(f"{key}: {value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xivaffects",
        description="Find the game entities affected by archive paths",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    xivaffects parse chara/monster/m0133/obj/body/b0002/b0002.imc
    xivaffects build --sheets ./csv --archive ./sqpack --bnpc ./bnpc.json
    xivaffects resolve chara/equipment/e0863/material/v0006/mt_c0101e0863_sho_a.mtrl
"""
    )
    parser.add_argument("--version", action="version", version=f"xivaffects {__version__}")
    parser.add_argument("-c", "--config", help="Configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # parse
    parse_p = subparsers.add_parser("parse", help="Parse archive paths")
    parse_p.add_argument("paths", nargs="+", help="Archive paths")
    parse_p.set_defaults(func=cmd_parse)

    # build
    build_p = subparsers.add_parser("build", help="Build the affects index")
    build_p.add_argument("--sheets", help="Directory of sheet CSV files")
    build_p.add_argument("--archive", help="Directory of extracted archive files")
    build_p.add_argument("--bnpc", help="Battle NPC name link JSON")
    build_p.add_argument("-o", "--index", help="Output index path")
    build_p.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    build_p.set_defaults(func=cmd_build)

    # resolve
    resolve_p = subparsers.add_parser("resolve", help="Resolve archive paths")
    resolve_p.add_argument("paths", nargs="+", help="Archive paths")
    resolve_p.add_argument("-i", "--index", help="Index path")
    resolve_p.set_defaults(func=cmd_resolve)

    # config
    config_p = subparsers.add_parser("config", help="Show configuration")
    config_p.add_argument("--init", nargs="?", const="-", help="Write a default config file")
    config_p.set_defaults(func=cmd_config)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = _load_config(args)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
