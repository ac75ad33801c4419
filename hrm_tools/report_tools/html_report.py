"""
================================================================================
HTML Report Rendering
================================================================================

Renders report entries into one self-contained static HTML document
(inline CSS, no scripts, no server dependency).

================================================================================
"""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import TYPE_CHECKING, Dict, List

if TYPE_CHECKING:
    from hrm_tools.report_tools.result_reporter import ReportEntry, ReportSummary


_STYLE = """
    body { font-family: Arial, sans-serif; margin: 20px; background: #1e1e1e; color: #ddd; }
    h1, h2 { color: #fff; }
    .summary { background: #2b2b2b; padding: 16px; border-radius: 8px; }
    .passed { color: #4caf50; }
    .failed { color: #ef5350; }
    .skipped { color: #ffb300; }
    .passed_with_warnings { color: #ffca28; }
    .pass { color: #4caf50; }
    .fail { color: #ef5350; }
    .warning, .skip { color: #ffb300; }
    .info { color: #90caf9; }
    table { width: 100%; border-collapse: collapse; margin-top: 12px; }
    th, td { padding: 8px; text-align: left; border: 1px solid #444; vertical-align: top; }
    th { background: #37474f; color: #fff; }
    pre { white-space: pre-wrap; font-size: 12px; margin: 4px 0; }
    details { margin-top: 16px; background: #262626; padding: 8px 12px; border-radius: 6px; }
"""


def _format_duration(duration_ms) -> str:
    if duration_ms is None:
        return "-"
    return f"{duration_ms / 1000:.2f}s"


def _render_entry(entry: "ReportEntry") -> str:
    outcome = entry.outcome.value
    lines = [
        "<details open>" if outcome == "failed" else "<details>",
        f"<summary><strong>{escape(entry.name)}</strong> "
        f"<span class=\"{outcome}\">[{outcome.upper()}]</span> "
        f"({_format_duration(entry.duration_ms)})</summary>",
        f"<p>{escape(entry.description)}</p>",
        f"<p>Thread: {escape(entry.thread_name)} | "
        f"Started: {entry.started_at:%Y-%m-%d %H:%M:%S}</p>",
        "<table>",
        "<tr><th>Time</th><th>Status</th><th>Details</th></tr>",
    ]
    for log in entry.logs:
        lines.append(
            f"<tr><td>{log.timestamp:%H:%M:%S}</td>"
            f"<td class=\"{log.level.value}\">{log.level.value.upper()}</td>"
            f"<td><pre>{escape(log.message)}</pre></td></tr>"
        )
    lines.append("</table>")

    if entry.failure is not None:
        lines.append(f"<p class=\"failed\">{escape(entry.failure.message)}</p>")
        if entry.failure.cause_chain:
            lines.append(f"<pre>{escape(entry.failure.cause_chain)}</pre>")

    lines.append("</details>")
    return "\n".join(lines)


def render_report(
    title: str,
    report_name: str,
    entries: List["ReportEntry"],
    summary: "ReportSummary",
    system_info: Dict[str, str],
) -> str:
    """
    Build the HTML document.

    Args:
        title: Document title
        report_name: Heading shown at the top of the report
        entries: Finished report entries, in start order
        summary: Outcome counts
        system_info: Environment key/value pairs

    Returns:
        HTML text
    """
    html_lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        "<meta charset=\"utf-8\"/>",
        f"<title>{escape(title)}</title>",
        f"<style>{_STYLE}</style>",
        "</head>",
        "<body>",
        f"<h1>{escape(report_name)}</h1>",
        f"<p>Generated: {datetime.now():%Y-%m-%d %H:%M:%S}</p>",
        "<div class=\"summary\">",
        "<h2>Summary</h2>",
        f"<p><strong>Total:</strong> {summary.total}</p>",
        f"<p><strong>Passed:</strong> <span class=\"passed\">{summary.passed}</span></p>",
        f"<p><strong>Failed:</strong> <span class=\"failed\">{summary.failed}</span></p>",
        f"<p><strong>Skipped:</strong> <span class=\"skipped\">{summary.skipped}</span></p>",
        f"<p><strong>Passed with warnings:</strong> "
        f"<span class=\"passed_with_warnings\">{summary.passed_with_warnings}</span></p>",
        f"<p><strong>Pass rate:</strong> {summary.pass_rate:.2f}%</p>",
        "</div>",
        "<h2>System Info</h2>",
        "<table>",
    ]
    for key, value in system_info.items():
        html_lines.append(f"<tr><th>{escape(key)}</th><td>{escape(value)}</td></tr>")
    html_lines.append("</table>")

    html_lines.append("<h2>Tests</h2>")
    if not entries:
        html_lines.append("<p>No tests were executed.</p>")
    for entry in entries:
        html_lines.append(_render_entry(entry))

    html_lines.extend(["</body>", "</html>", ""])
    return "\n".join(html_lines)


__all__ = ["render_report"]
