"""UI resource generators."""

from mcp_ui_server import create_ui_resource
from mcp_ui_server.core import UIResource

from cmdgroups_mcp.models import ExecutionOutcome
from cmdgroups_mcp.ui.templates import get_results_html


async def create_results_ui(
    group_id: str, group_name: str, outcomes: list[ExecutionOutcome]
) -> UIResource:
    """Create the execution results viewer for a group run.

    Args:
        group_id: Id of the group that ran
        group_name: Display name of the group
        outcomes: Per-command outcomes in run order

    Returns:
        UIResource with the rendered HTML
    """
    html = get_results_html(group_name, outcomes)
    return create_ui_resource({
        "uri": f"ui://cmdgroups/results/{group_id}",
        "content": {"type": "rawHtml", "htmlString": html},
        "encoding": "text",
    })
