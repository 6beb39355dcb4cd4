"""Report module - verdict emission and rendering."""

from cronshift.report.models import JobKey, JobSkeleton, Report, ReportStatus, TriggerSpec
from cronshift.report.ops import emit, error_report
from cronshift.report.render import (
    RENDERERS,
    render_json,
    render_markdown,
    render_yaml,
    summarize,
)

__all__ = [
    "RENDERERS",
    "JobKey",
    "JobSkeleton",
    "Report",
    "ReportStatus",
    "TriggerSpec",
    "emit",
    "error_report",
    "render_json",
    "render_markdown",
    "render_yaml",
    "summarize",
]
