"""Interactive entry point: `<local|drive> <command> [args...]` per line."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence, TextIO

from gdrivenav.auth import DeviceCode
from gdrivenav.errors import GDriveNavError
from gdrivenav.logging_setup import setup_logging
from gdrivenav.storage import GoogleDriveStorage, LocalStorage, Storage

from .commands import CommandDispatcher
from .reader import LineReader

logger = logging.getLogger(__name__)

EXIT_WORDS: frozenset[str] = frozenset({"exit", "quit"})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gdrivenav",
        description="Navigate a local folder and Google Drive from one prompt.",
    )
    parser.add_argument(
        "--local-root",
        default=os.environ.get("GDRIVENAV_LOCAL_ROOT"),
        help="Root of the local storage (prompted when omitted).",
    )
    parser.add_argument(
        "--config",
        default=os.environ.get("GDRIVENAV_CONFIG", "./client_secret.json"),
        help="Path to the OAuth client credential JSON.",
    )
    parser.add_argument(
        "--log-file",
        default=os.environ.get("GDRIVENAV_LOG_FILE", "./log.txt"),
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("GDRIVENAV_LOG_LEVEL", "INFO"),
    )
    parser.add_argument(
        "--no-drive",
        action="store_true",
        help="Run against the local storage only.",
    )
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.log_level)

    reader = LineReader(stdin)

    local_root = args.local_root
    if not local_root:
        print("Enter the local root directory:", file=stdout)
        if not reader.read_line():
            print("No local root given.", file=stdout)
            return 2
        local_root = reader.line.strip()

    storages: dict[str, Storage] = {}
    try:
        storages["local"] = LocalStorage(local_root)
        if not args.no_drive:
            storages["drive"] = GoogleDriveStorage.connect(
                args.config,
                prompt=lambda code: _print_device_code(code, stdout),
            )
    except GDriveNavError as e:
        logger.error("Initialization failed: %s", e)
        print(f"Initialization failed: {e}", file=stdout)
        return 1

    logger.info("Ready: %s", ", ".join(s.display_name for s in storages.values()))

    dispatcher = CommandDispatcher(stdout)
    while reader.read_line():
        selector = reader.next_parameter()
        if selector in EXIT_WORDS:
            break

        storage = storages.get(selector or "")
        if storage is None:
            print(
                f"Invalid storage \"{selector}\". Use one of: {', '.join(storages)}.",
                file=stdout,
            )
            continue

        dispatcher.execute(storage, reader)

    return 0


def _print_device_code(code: DeviceCode, out: TextIO) -> None:
    print(f"Visit {code.verification_url} and enter the code {code.user_code}", file=out)


if __name__ == "__main__":
    raise SystemExit(main())
