"""Human-readable summary rendering for $GITHUB_STEP_SUMMARY."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of manifest issues."""
    totals = report.get("totals", {})
    projects = report.get("projects", [])

    lines = []
    lines.append("# vpm-validator Summary")
    lines.append("")
    lines.append(
        f"Manifests: {totals.get('projects', 0)} | Errors: {totals.get('errors', 0)}"
        f" | Warnings: {totals.get('warnings', 0)} | Info: {totals.get('infos', 0)}"
    )
    lines.append("")
    lines.append("| Manifest | Package | Severity | Message |")
    lines.append("| --- | --- | --- | --- |")

    has_rows = False

    for proj in projects:
        path = proj.get("path") or "(unknown manifest)"
        package = " ".join(p for p in (proj.get("name"), proj.get("version")) if p) or "n/a"
        issues = proj.get("issues") or []
        if not issues:
            lines.append(f"| {path} | {package} | ok | No issues |")
            has_rows = True
            continue

        for issue in issues:
            message = str(issue.get("message", "")).replace("|", "\\|")
            lines.append(f"| {path} | {package} | {issue.get('severity', '')} | {message} |")
            has_rows = True

    if not has_rows:
        lines.append("| (no manifests scanned) | n/a | ok | No issues |")

    skipped = (report.get("catalog") or {}).get("skipped") or []
    if skipped:
        lines.append("")
        lines.append(f"## Skipped index entries ({len(skipped)})")
        lines.append("")
        for record in skipped:
            lines.append(f"- {record}")

    return "\n".join(lines) + "\n"
