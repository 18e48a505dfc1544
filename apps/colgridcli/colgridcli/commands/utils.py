"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from colgrid.config import CONFIG_FILENAME, HeaderConfig

console = Console()


class IdStrategyOption(str, Enum):
    SEQUENTIAL = "sequential"
    UUID7 = "uuid7"
    POSITIONAL = "positional"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the colgrid CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level
    - Debug (COLGRID_DEBUG=1): DEBUG level - shows every layout build
    """
    if os.environ.get("COLGRID_DEBUG"):
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=bool(os.environ.get("COLGRID_DEBUG")),
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    for name in ("colgrid", "colgridcli"):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers = [handler]
        logger.propagate = False


def load_header_config(
    config_path: Optional[Path] = None,
    id_strategy: Optional[IdStrategyOption] = None,
    css_prefix: Optional[str] = None,
) -> HeaderConfig:
    """Load colgrid.yaml (explicit path, else ./colgrid.yaml) and apply CLI overrides"""
    path = config_path or Path.cwd() / CONFIG_FILENAME
    config = HeaderConfig.load(path)

    overrides = {}
    if id_strategy is not None:
        overrides["id_strategy"] = id_strategy.value
    if css_prefix is not None:
        overrides["css_prefix"] = css_prefix
    if overrides:
        config = config.model_copy(update=overrides)
    return config
