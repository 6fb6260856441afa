"""HTML templates for UI resources."""

import html
import re

from cmdgroups_mcp.models import ExecutionOutcome


def minify_html(text: str) -> str:
    """Minify HTML by collapsing whitespace between tags.

    Whitespace inside ``<pre>`` blocks is preserved; command output is always
    rendered there.
    """
    parts = re.split(r"(<pre[^>]*>.*?</pre>)", text, flags=re.DOTALL)
    out = []
    for part in parts:
        if part.startswith("<pre"):
            out.append(part)
            continue
        part = re.sub(r"<!--.*?-->", "", part, flags=re.DOTALL)
        part = re.sub(r"[ \t]+", " ", part)
        part = re.sub(r"\n\s*", "\n", part)
        part = re.sub(r">\s+<", "><", part)
        out.append(part)
    return "".join(out).strip()


def get_base_styles() -> str:
    """Base CSS for result pages."""
    return """
    <style>
        :root {
            --background: 0 0% 100%;
            --foreground: 222.2 84% 4.9%;
            --muted: 210 40% 96.1%;
            --muted-foreground: 215.4 16.3% 46.9%;
            --border: 214.3 31.8% 91.4%;
            --success: 160 84% 39%;
            --destructive: 0 84% 60%;
            --radius: 0.5rem;
        }

        * { box-sizing: border-box; margin: 0; padding: 0; }

        body {
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Inter", sans-serif;
            font-size: 14px;
            line-height: 1.5;
            color: hsl(var(--foreground));
            background: hsl(var(--background));
            padding: 24px;
        }

        .container { max-width: 1200px; margin: 0 auto; }

        .header {
            border-bottom: 1px solid hsl(var(--border));
            padding-bottom: 16px;
            margin-bottom: 24px;
        }

        .title { font-size: 24px; font-weight: 600; letter-spacing: -0.025em; }
        .subtitle { font-size: 14px; color: hsl(var(--muted-foreground)); margin-top: 4px; }

        .result {
            border: 1px solid hsl(var(--border));
            border-radius: var(--radius);
            margin-bottom: 16px;
            overflow: hidden;
        }

        .result h3 {
            display: flex;
            align-items: center;
            gap: 8px;
            font-size: 15px;
            font-weight: 600;
            padding: 10px 14px;
            background: hsl(var(--muted));
        }

        .status { font-size: 16px; }
        .result.ok .status { color: hsl(var(--success)); }
        .result.failed .status { color: hsl(var(--destructive)); }
        .result.failed { border-color: hsl(var(--destructive) / 0.5); }

        pre.output {
            font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace;
            font-size: 13px;
            padding: 12px 14px;
            white-space: pre-wrap;
            word-break: break-word;
            max-height: 400px;
            overflow: auto;
        }
    </style>
    """


def get_results_html(group_name: str, outcomes: list[ExecutionOutcome]) -> str:
    """Generate the execution results page for a group run.

    Args:
        group_name: Display name of the group
        outcomes: One outcome per command, in run order

    Returns:
        Complete HTML page
    """
    count = len(outcomes)
    failed = sum(1 for o in outcomes if o.failed)

    sections = []
    for o in outcomes:
        css = "failed" if o.failed else "ok"
        icon = "&#10007;" if o.failed else "&#10003;"
        output = html.escape(o.output) if o.output else "(no output)"
        sections.append(
            f"""
            <div class="result {css}">
                <h3><span class="status">{icon}</span>{html.escape(o.name)}</h3>
                <pre class="output">{output}</pre>
            </div>
            """
        )

    page = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <title>{html.escape(group_name)} results</title>
        {get_base_styles()}
    </head>
    <body>
        <div class="container">
            <div class="header">
                <div class="title">Execution Results: {html.escape(group_name)}</div>
                <div class="subtitle">{count} command{"s" if count != 1 else ""}, {failed} failed</div>
            </div>
            <div class="content">
                {"".join(sections)}
            </div>
        </div>
    </body>
    </html>
    """
    return minify_html(page)
