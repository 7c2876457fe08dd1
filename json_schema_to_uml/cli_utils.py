"""
CLI utilities for command line reconstruction and run summaries.
"""

from pathlib import Path

import click

COMMAND_NAME = "json_schema_to_uml"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Paths are shortened to their file names so the result can be embedded in
    exported documents.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
    except RuntimeError:
        return COMMAND_NAME

    cli_args = ctx.params
    arguments = []
    options = []

    for param in click_command.params:
        value = cli_args.get(param.name)
        if not value:
            continue

        if isinstance(param, click.Argument):
            arguments.append(Path(str(value)).name)
        elif isinstance(param, click.Option) and value != param.default:
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, Path(str(value)).name if isinstance(value, (str, Path)) else str(value)])

    return " ".join([COMMAND_NAME, *arguments, *options])


def summarize(result) -> list[str]:
    """Human readable summary lines of an analysis result."""
    unknown_targets = sum(1 for association in result.associations if association.target is result.unknown)
    unknown_superclasses = sum(1 for concept in result.concepts if result.unknown in concept.superclasses)

    lines = [
        f"Concepts: {len(result.concepts) - 1}",
        f"Associations: {len(result.associations)}",
        f"Enumerations: {sum(1 for _ in result.model.iter_enumerations())}",
    ]
    if unknown_targets or unknown_superclasses:
        lines.append(
            f"Bound to {result.unknown.name}: {unknown_targets} association(s), {unknown_superclasses} superclass(es)"
        )
    for warning in result.skipped:
        lines.append(f"Skipped {warning}")
    return lines
