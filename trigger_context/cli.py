"""Command-line entry point that prints the trigger context as JSON."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import msgspec

from trigger_context.context import parse_github_context
from trigger_context.errors import ConfigurationError
from trigger_context.logging import (
    configure_logging,
    get_logger,
    log_exception,
    log_info,
    log_warning,
)
from trigger_context.modes import describe_mode

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Build the context from the environment and write it as JSON.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when configuration is invalid.

    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--json-out",
        type=Path,
        default=None,
        help="Write the context to this path instead of stdout",
    )
    args = parser.parse_args(argv)

    raw_level = os.environ.get("TRIGGER_CONTEXT_LOG_LEVEL", "INFO")
    normalized_level, invalid_level = configure_logging(raw_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid TRIGGER_CONTEXT_LOG_LEVEL %r, falling back to %s",
            raw_level,
            normalized_level,
        )

    try:
        context = parse_github_context()
    except ConfigurationError as exc:
        log_exception(logger, f"Cannot build trigger context: {exc}", exc)
        return 1

    mode = context.inputs.mode
    log_info(logger, "Using %s mode: %s", mode, describe_mode(mode))

    encoded = msgspec.json.encode(context.to_builtins())
    if args.json_out:
        args.json_out.write_bytes(encoded)
    else:
        sys.stdout.write(encoded.decode() + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
