"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any


def aggregate(
    projects: list[dict[str, Any]],
    catalog_summary: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Aggregate per-manifest issues into a single report.

    The input ``projects`` is expected to be a list of dicts with at least
    ``path`` and ``issues`` keys. ``issues`` is a list of objects containing
    ``severity`` (info, warning or error) and ``message``. ``catalog_summary``
    (package and version counts plus skipped index entries) is reported under
    ``catalog`` when a catalog was loaded.
    """

    counts = {"info": 0, "warning": 0, "error": 0}
    for project in projects:
        for issue in project.get("issues", []):
            severity = issue.get("severity")
            if severity in counts:
                counts[severity] += 1

    report: dict[str, Any] = {
        "version": "1",
        "hasErrors": counts["error"] > 0,
        "hasFindings": counts["error"] + counts["warning"] > 0,
        "projects": projects,
        "totals": {
            "projects": len(projects),
            "errors": counts["error"],
            "warnings": counts["warning"],
            "infos": counts["info"],
        },
    }
    if catalog_summary is not None:
        report["catalog"] = dict(catalog_summary)

    return report
