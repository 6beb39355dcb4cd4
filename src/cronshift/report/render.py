"""Report rendering for the report sink (files, stdout).

Design principles:
- Unit order is the order the reports were produced in
- Reasons are printed verbatim, never summarized
- Every format carries the same field set
"""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Sequence
from typing import Any

import yaml

from cronshift.config.constants import TRIGGER_TBD
from cronshift.report.models import Report, ReportStatus


def summarize(reports: Sequence[Report]) -> dict[str, int]:
    """Count reports per status; every status is present, zero or not."""
    counts = Counter(r.status for r in reports)
    return {status.value: counts.get(status, 0) for status in ReportStatus}


def _document(reports: Sequence[Report]) -> dict[str, Any]:
    return {
        "summary": summarize(reports),
        "units": [r.to_dict() for r in reports],
    }


def render_json(reports: Sequence[Report]) -> str:
    return json.dumps(_document(reports), indent=2) + "\n"


def render_yaml(reports: Sequence[Report]) -> str:
    return yaml.safe_dump(_document(reports), sort_keys=False, default_flow_style=False)


def render_markdown(reports: Sequence[Report]) -> str:
    """Migration review document: summary table, then one section per unit."""
    lines = [
        "# Timer Migration Report",
        "",
        "## Summary",
        "",
        "| Status | Count |",
        "|--------|-------|",
    ]
    for status, count in summarize(reports).items():
        lines.append(f"| {status} | {count} |")
    lines.append("")

    for report in reports:
        lines.extend(_markdown_unit(report))

    lines.append("---")
    lines.append("*Generated by cronshift*")
    return "\n".join(lines) + "\n"


def _markdown_unit(report: Report) -> list[str]:
    lines = ["---", "", f"## {report.unit}", "", f"**Status:** `{report.status.value}`", ""]

    if report.reasons:
        lines.append("**Reasons:**")
        lines.append("")
        lines.extend(f"- {reason}" for reason in report.reasons)
        lines.append("")

    if report.error is not None:
        lines.append(f"**Error code:** `{report.error['code']} {report.error['error']}`")
        lines.append("")

    if report.job is not None:
        job = report.job
        lines.append("**Job:**")
        lines.append("")
        lines.append(f"- identity: `{job.key.group}.{job.key.name}`")
        lines.append(f"- class: `{job.job_class}`")
        lines.append(f"- durable: {str(job.durable).lower()}")
        lines.append(f"- persistent: {str(job.persistent).lower()}")
        if job.trigger is not None:
            lines.append(f"- trigger: `{job.trigger.cron}` ({job.trigger.timezone})")
        else:
            lines.append(f"- trigger: {TRIGGER_TBD}")
        for key, value in job.data_map.items():
            lines.append(f"- data `{key}`: {value if value is not None else '(none)'}")
        lines.append("")

    if report.advisories:
        lines.append("**Advisories:**")
        lines.append("")
        lines.extend(f"- {note}" for note in report.advisories)
        lines.append("")

    return lines


RENDERERS = {
    "json": render_json,
    "yaml": render_yaml,
    "markdown": render_markdown,
}
