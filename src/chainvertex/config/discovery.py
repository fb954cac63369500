"""Locating and reading ``chainvertex.toml``.

Lookup order: the ``CHAINVERTEX_CONFIG`` environment variable if set
(even when it names a missing file, which means "no config"), otherwise
the nearest ``chainvertex.toml`` in the start directory or any ancestor.
An explicit ``--config`` bypasses this module's search entirely.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from chainvertex.config.models import ChainVertexConfig

CONFIG_FILENAME = "chainvertex.toml"
CONFIG_ENV_VAR = "CHAINVERTEX_CONFIG"


def _candidates(start: Path) -> Iterator[Path]:
    """``chainvertex.toml`` in *start*, then in each parent up to the root."""
    start = start.resolve()
    for directory in (start, *start.parents):
        yield directory / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None
    return next((c for c in _candidates(start or Path.cwd()) if c.is_file()), None)


def read_config_table(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    return tomllib.loads(path.read_text(encoding="utf-8"))


def load_config(path: Path | None = None, cwd: Path | None = None) -> ChainVertexConfig:
    """Validate the config at *path* (or the one found from *cwd*).

    A missing file is not an error: every section falls back to its defaults.
    """
    path = path or find_config(cwd)
    if path is None:
        return ChainVertexConfig()
    return ChainVertexConfig.model_validate(read_config_table(path))
