"""Text formatting shared by tools and resources."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdgroups_mcp.models import CommandGroup, ExecutionOutcome


def format_group(group: "CommandGroup") -> str:
    """Format one group with its commands in execution order."""
    lines = [f"{group.name} [{group.id}]"]
    if not group.commands:
        lines.append("  (no commands)")
    for i, cmd in enumerate(group.commands, start=1):
        mode = " (detached)" if cmd.detached else ""
        lines.append(f"  {i}. {cmd.name}{mode} [{cmd.id}]")
        lines.append(f"     $ {cmd.command_line}")
    return "\n".join(lines)


def format_groups(groups: list["CommandGroup"]) -> str:
    """Format all groups, separated by blank lines."""
    if not groups:
        return "No command groups defined."
    return "\n\n".join(format_group(g) for g in groups)


def format_outcomes(group_name: str, outcomes: list["ExecutionOutcome"]) -> str:
    """Format batch results for display.

    One section per command with a ``[FAILED]`` marker on error outputs,
    followed by a success summary.
    """
    lines = []

    for o in outcomes:
        header = f"═══ {o.name} "
        if o.failed:
            header += "[FAILED] "
        header += "═" * max(3, 60 - len(header))
        lines.append(header)
        lines.append(o.output.rstrip("\n") if o.output else "(no output)")
        lines.append("")

    succeeded = sum(1 for o in outcomes if not o.failed)
    count = len(outcomes)
    lines.append(
        f"─── {group_name}: {succeeded}/{count} command"
        f"{'s' if count != 1 else ''} succeeded ───"
    )
    return "\n".join(lines)
