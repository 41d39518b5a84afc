"""
Command line entry point for File Courier.

Prints the special file, posts the secret file, and maps failures to exit
codes: locating, reading and configuration errors exit 1; a failed post is
reported on stderr and still exits 0.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .config.parser import ConfigurationError, create_config_template, load_config
from .errors import CourierError
from .pipeline import CourierPipeline


logger = logging.getLogger(__name__)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by -v flags."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="filecourier",
        description="Locate two named files, print one and post the other to an HTTP endpoint."
    )
    p.add_argument("--config", help="YAML configuration file (default: discovered .filecourier.yaml)")
    p.add_argument("--root", help="directory the search starts from (default: current directory)")
    p.add_argument("--special-name", dest="special_file", help="name of the file to print")
    p.add_argument("--secret-name", dest="secret_file", help="name of the file to post")
    p.add_argument("--endpoint", help="URL the payload is posted to")
    p.add_argument("--dry-run", action="store_true", default=None, help="build the request without sending it")
    p.add_argument("--strict", action="store_true", help="treat configuration warnings as errors")
    p.add_argument("--init-config", metavar="PATH", help="write a template configuration file and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="increase log verbosity")
    return p


def cmd_run(args: argparse.Namespace) -> int:
    overrides = {
        "root": args.root,
        "special_file": args.special_file,
        "secret_file": args.secret_file,
        "endpoint": args.endpoint,
        "dry_run": args.dry_run,
    }
    parsed = load_config(args.config, overrides=overrides, strict_mode=args.strict)
    for warning in parsed.warnings:
        logger.info(warning)

    config = parsed.config
    result = CourierPipeline(config).run()

    print(f"Contents of {config.special_file}:\n{result.special_text}")

    if result.send_error:
        print(f"Error sending data to remote server: {result.send_error}", file=sys.stderr)
    elif result.dry_run:
        print(f"Dry run: {result.payload_size} bytes from {result.secret_path} not sent to {config.endpoint}")
    else:
        print("Data sent to remote server successfully")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.init_config:
            create_config_template(args.init_config)
            print(f"Configuration template written to {args.init_config}")
            return 0
        return cmd_run(args)
    except (ConfigurationError, CourierError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
