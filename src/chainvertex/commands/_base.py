"""Click command classes that carry an ``--examples`` flag.

Every chainvertex command is declared with an ``examples=`` block. The
text is kept out of ``--help`` and printed only on ``--examples``, which
exits before argument validation, so ``vertex create --examples`` works
without DATA.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds the ``examples`` keyword and the eager ``--examples`` option."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class CvCommand(_ExamplesMixin, click.Command):
    """A leaf command with ``--examples``."""


class CvGroup(_ExamplesMixin, click.Group):
    """A command group with ``--examples``; its subcommands default to ``CvCommand``."""

    command_class = CvCommand
