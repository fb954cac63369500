"""Output mode selection for ServiceResult.

The CLI renders results for humans (Rich), for scripts (``--json``), or
as bare ids (``--quiet``). This module picks the mode; the Rich work
lives in :mod:`chainvertex.output.renderers`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chainvertex.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from chainvertex.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, quiet wins over the default Rich rendering.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
