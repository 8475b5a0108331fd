"""CLI entrypoints for tsinventory commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, InventoryConfig, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator


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


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsinventory",
        description="Catalog top-level TypeScript/JavaScript declarations in a repository.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors on stderr.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write DEBUG-level logs to this file.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .tsinventory.yml file or the directory holding it.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze a local directory or git URL and print the catalog as JSON.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "locator",
        nargs="?",
        default=".",
        help="Repository path or git URL (defaults to current directory).",
    )
    analyze_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the JSON result to this file instead of stdout.",
    )
    analyze_parser.add_argument(
        "--skip-errors",
        action="store_true",
        help="Skip files that fail to parse instead of aborting the analysis.",
    )
    analyze_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of threads used to classify files.",
    )
    analyze_parser.add_argument(
        "--no-tsconfig",
        action="store_true",
        help="Analyze with compiler defaults when tsconfig.json is missing.",
    )
    analyze_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (0 for compact output).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP analysis service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default=None, help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on.")

    return parser


def _apply_overrides(config: InventoryConfig, args: argparse.Namespace) -> None:
    if getattr(args, "skip_errors", False):
        config.analysis.on_parse_error = "skip"
    workers = getattr(args, "workers", None)
    if workers is not None:
        config.analysis.workers = workers
    if getattr(args, "no_tsconfig", False):
        config.analysis.require_tsconfig = False
    host = getattr(args, "host", None)
    if host:
        config.service.host = host
    port = getattr(args, "port", None)
    if port is not None:
        config.service.port = port


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tsinventory commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=args.quiet, log_file=args.log_file
    )

    try:
        config = load_config(args.config or Path.cwd())
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    _apply_overrides(config, args)

    if args.command == "analyze":
        orchestrator = Orchestrator(config=config)
        try:
            result = orchestrator.run_analysis(args.locator)
        except Exception as exc:
            parser.exit(
                1,
                f"tsinventory analyze failed: {exc}\nRun with --verbose for more details.\n",
            )
        indent = args.indent if args.indent > 0 else None
        payload = json.dumps(result.to_dict(), indent=indent, ensure_ascii=False)
        if args.output is not None:
            args.output.write_text(payload + "\n", encoding="utf-8")
            print(f"Wrote {len(result.files)} file records to {_relativize(args.output)}")
        else:
            print(payload)
    elif args.command == "serve":
        from .service import run_service

        run_service(
            host=config.service.host,
            port=config.service.port,
            orchestrator_factory=lambda: Orchestrator(config=config, allow_local=False),
        )
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
