"""Launch the desktop viewer."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from ..io.config import default_config, load_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="three_body")
    parser.add_argument("--config", type=Path, default=None, help="config JSON file")
    parser.add_argument(
        "--timestep",
        type=float,
        default=None,
        help="simulated seconds per real second (overrides the config)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config is not None else default_config()
    except (OSError, ValueError) as exc:
        parser.error(f"--config: {exc}")
    if args.timestep is not None:
        config = replace(config, timestep=args.timestep)
        try:
            config.validate()
        except ValueError as exc:
            parser.error(f"--timestep: {exc}")

    from PySide6 import QtWidgets

    from .window import MainWindow

    qt_app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    window = MainWindow(config)
    window.show()
    return qt_app.exec()
