"""CLI entrypoints for implindex commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .builder import IndexKey, MalformedFact, build_index
from .config import ConfigError, load_config
from .loader import FactsFileError, load_facts
from .logging import configure_logging
from .orchestrator import Orchestrator
from .render import DescriptionRenderer
from .writer import FORMATS


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="implindex",
        description="Build static trait implementor indexes for API documentation.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write detailed logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Build the implementor index and write its data files.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "facts",
        nargs="?",
        default="facts.yml",
        help="Path to the extracted facts file (defaults to ./facts.yml).",
    )
    build_parser.add_argument(
        "--out",
        default=None,
        help="Output directory (defaults to output.dir from .implindex.yml).",
    )
    build_parser.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Data file format (defaults to output.format from .implindex.yml).",
    )
    build_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build and validate the index without writing files.",
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Print the index for a facts file as JSON.",
    )
    _add_verbose_option(show_parser, suppress_default=True)
    show_parser.add_argument("facts", help="Path to the extracted facts file.")
    show_parser.add_argument(
        "--by-library",
        action="store_true",
        help="Key entries by implementing library instead of trait owner.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for implindex commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "build":
        try:
            outcome = Orchestrator().run_build(
                args.facts,
                args.out,
                fmt=args.format,
                dry_run=bool(args.dry_run),
            )
        except (FileNotFoundError, FactsFileError, ConfigError) as exc:
            parser.exit(1, f"{exc}\n")
        except ValueError as exc:
            parser.exit(1, f"implindex build failed: {exc}\n")
        except OSError as exc:
            parser.exit(1, f"implindex build failed: unable to write output: {exc}\n")
        if outcome.dry_run:
            print(f"Index OK: {outcome.index.total()} implementor(s), {len(outcome.index)} key(s) (dry-run)")
        else:
            for path in outcome.files:
                print(f"Wrote {_relativize(path)}")
    elif args.command == "show":
        facts_path = Path(args.facts)
        try:
            config = load_config(facts_path.parent)
            facts = load_facts(facts_path)
            key = IndexKey.IMPLEMENTING_LIBRARY if args.by_library else IndexKey.TRAIT_OWNER
            index = build_index(
                facts, key=key, renderer=DescriptionRenderer(config.links.extern_urls)
            )
        except (FactsFileError, ConfigError, MalformedFact) as exc:
            parser.exit(1, f"{exc}\n")
        print(json.dumps(index.to_dict(), indent=2, ensure_ascii=False))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
