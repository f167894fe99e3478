"""Health Events Notifier -- local entry point.

Replays EventBridge envelopes through the same pipeline the Lambda runs:

    envelope file (or stdin)
        -> parse_envelope
        -> decode_detail
        -> consumers (LogConsumer)

Usage:
    python main.py tests/testdata/public-ec2-event.json
    aws events ... | python main.py -

Exits with status 1 if any envelope failed to decode.
"""
from __future__ import annotations

import argparse
import logging
import sys

from core.errors import DecodeError
from receiver.handler import Handler, log_level_from_env

log = logging.getLogger(__name__)


def _read(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def run(paths: list[str]) -> int:
    handler = Handler()
    failures = 0

    for path in paths:
        try:
            raw = _read(path)
        except OSError as exc:
            log.error("Cannot read %s: %s", path, exc)
            failures += 1
            continue

        try:
            handler.handle(raw)
        except DecodeError:
            # already logged by the handler
            failures += 1

    if failures:
        log.warning("%d of %d envelope(s) failed", failures, len(paths))
    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Decode AWS Health event envelopes and log them.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        default=["-"],
        help="envelope JSON files ('-' or none for stdin)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=log_level_from_env(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    return run(args.files)


if __name__ == "__main__":
    sys.exit(main())
