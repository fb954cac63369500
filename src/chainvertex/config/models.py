"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, chainvertex.toml only contains
overrides. An empty or missing file is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    caller: str = "anonymous"
    clock: Literal["logical", "wall"] = "logical"
    state_file: Path | None = None


class EventsConfig(BaseModel):
    """[events] section."""

    model_config = {"frozen": True}

    sync: bool = False
    max_retries: int = Field(default=3, ge=1)
    history: int = Field(default=1000, ge=1)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    audit: bool = True
    entry_points: bool = True
    local_dir: Path | None = None


class ChainVertexConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    store: StoreConfig = Field(default_factory=StoreConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
