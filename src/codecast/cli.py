from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .builder import build_info
from .config import load_settings
from .errors import CodecastError
from .http import create_session
from .models import BuildContext
from .pipeline import read_codes, run
from .sources import resolve
from .storage import write_outputs

logger = logging.getLogger("codecast")


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="codecast")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Warnings only")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser("build", help="Scrape codes and write outputs")
    build_parser.add_argument("codes_file", type=Path)
    build_parser.add_argument("--out-dir", type=Path, default=Path("."))
    build_parser.add_argument("--config", help="Settings JSON file or inline JSON")

    resolve_parser = subparsers.add_parser("resolve", help="Show the source and URL for a code")
    resolve_parser.add_argument("code")
    resolve_parser.add_argument("--json", action="store_true", help="JSON output")

    show_parser = subparsers.add_parser("show", help="Scrape one code and print it")
    show_parser.add_argument("code")
    show_parser.add_argument("--config", help="Settings JSON file or inline JSON")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.quiet)

    if args.command == "resolve":
        source, url = resolve(args.code)
        if args.json:
            print(json.dumps({"code": args.code, "source": source, "url": url}, indent=2))
        else:
            print(f"{source} {url}")
        return 0

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as exc:
        print(f"invalid config: {exc}", file=sys.stderr)
        return 2
    ctx = BuildContext(session=create_session(), retry_config=settings.retry)

    try:
        if args.command == "show":
            info = build_info(args.code, ctx)
            print(json.dumps(info.to_dict(), ensure_ascii=False, indent=2))
            return 0

        if args.command == "build":
            if not args.codes_file.exists():
                print(f"codes file not found: {args.codes_file}", file=sys.stderr)
                return 2
            codes = read_codes(args.codes_file)
            infos = run(codes, ctx)
            written = write_outputs(infos, args.out_dir, settings)
            report = {
                "codes": [info.code for info in infos],
                "outputs": {kind: str(path) for kind, path in written.items()},
            }
            print(json.dumps(report, ensure_ascii=False, indent=2))
            return 0
    except CodecastError as exc:
        logger.error("run failed: %s", exc)
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())
