"""
overtime_config -- single public entrypoint for overtime policy.

Responsibility:
    Provides the way to obtain an ``OvertimeConfig`` at runtime through
    ``get_active_config()``.  Services never read files or environment
    variables; they receive the config at construction time.

Architecture position:
    Configuration sits above ``overtime_kernel``.  The kernel owns the
    schema (``overtime_kernel.domain.config``) and MUST NEVER import from
    this package.

Failure modes:
    - ``FileNotFoundError`` -- the requested file does not exist.
    - ``ValueError`` -- unknown keys or out-of-range values.

Audit relevance:
    Every call emits an ``overtime_config_loaded`` log entry with the
    source path and a checksum of the parsed file.
"""

from __future__ import annotations

from pathlib import Path

from overtime_config.loader import (
    compute_checksum,
    load_config,
    load_holidays,
    load_yaml_file,
    parse_overtime_config,
)
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.logging_config import get_logger

logger = get_logger("config")

_DEFAULT_CONFIG_FILE = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(path: Path | str | None = None) -> OvertimeConfig:
    """
    Load the active overtime policy.

    Args:
        path: YAML file to load.  Defaults to ``overtime_config/sets/default.yaml``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file fails schema validation.
    """
    source = Path(path) if path is not None else _DEFAULT_CONFIG_FILE
    data = load_yaml_file(source)
    config = parse_overtime_config(data)
    logger.info(
        "overtime_config_loaded",
        extra={
            "source": str(source),
            "checksum": compute_checksum(data),
            "max_ot_hours": config.max_ot_hours,
            "warning_threshold": config.warning_threshold,
            "local_timezone": config.local_timezone,
        },
    )
    return config


__all__ = [
    "OvertimeConfig",
    "get_active_config",
    "load_config",
    "load_holidays",
    "parse_overtime_config",
]
