from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

import yaml
from omegaconf.errors import OmegaConfBaseException

from .analysis import analyze, magnitude_spectrum
from .audio import open_waveform
from .config import framing_parameters, load_config
from .errors import PcmFrameError
from .logging_utils import log_frames_jsonl
from .signal import available_windows

LOGGER = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure logging format and level for CLI commands."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(message)s",
    )


def describe_command(args: argparse.Namespace) -> int:
    """Frame one audio file and print its analysis metadata as YAML."""
    cfg = load_config(args.config, overrides=args.set or None)
    configure_logging(args.log_level or cfg.runtime.log_level)

    waveform = open_waveform(args.path)
    params = framing_parameters(cfg.framing, stereo=waveform.is_stereo)
    result = analyze(
        waveform,
        params,
        magnitude_spectrum,
        workers=cfg.runtime.workers,
    )
    yaml.safe_dump(result.metadata.to_dict(), sys.stdout, sort_keys=False)
    if args.frames_jsonl:
        written = log_frames_jsonl(args.frames_jsonl, result)
        LOGGER.info("Wrote %d frame records to %s", written, args.frames_jsonl)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pcmframe",
        description="Prepare analysis frames from PCM and compressed audio",
    )
    parser.add_argument(
        "--list-windows",
        action="store_true",
        help="Print available window function names and exit",
    )
    subparsers = parser.add_subparsers(dest="command")

    describe = subparsers.add_parser("describe", help="Print framing metadata for a file")
    describe.add_argument("path", help="Audio file to frame")
    describe.add_argument("--config", default=None, help="YAML configuration file")
    describe.add_argument(
        "--set",
        action="append",
        metavar="KEY=VALUE",
        help="Dotlist override, e.g. framing.window_size=1024",
    )
    describe.add_argument(
        "--frames-jsonl",
        default=None,
        help="Write one peak summary per frame to this JSONL file",
    )
    describe.add_argument("--log-level", default=None, help="Override runtime.log_level")
    describe.set_defaults(func=describe_command)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_windows:
        for name in available_windows():
            print(name)
        return 0

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except (PcmFrameError, FileNotFoundError, OmegaConfBaseException) as exc:
        message = str(exc).splitlines()[0] if str(exc) else type(exc).__name__
        print(f"pcmframe: error: {message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
