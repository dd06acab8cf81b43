from __future__ import annotations

from vpm_validator.report import aggregate
from vpm_validator.summary import render_summary


def test_aggregate_counts_by_severity() -> None:
    report = aggregate(
        [
            {"path": "a/package.json", "issues": [{"severity": "error", "message": "x"}]},
            {
                "path": "b/package.json",
                "issues": [
                    {"severity": "warning", "message": "y"},
                    {"severity": "info", "message": "z"},
                ],
            },
        ],
        {"packages": 1, "versions": 2},
    )
    assert report["hasErrors"] is True
    assert report["hasFindings"] is True
    assert report["totals"] == {"projects": 2, "errors": 1, "warnings": 1, "infos": 1}
    assert report["catalog"] == {"packages": 1, "versions": 2}


def test_aggregate_info_only_is_not_a_finding() -> None:
    report = aggregate([{"path": "a", "issues": [{"severity": "info", "message": "hint"}]}])
    assert report["hasErrors"] is False
    assert report["hasFindings"] is False
    assert "catalog" not in report


def test_render_summary_rows() -> None:
    report = aggregate(
        [
            {
                "path": "Packages/a/package.json",
                "name": "com.a",
                "version": "1.0.0",
                "issues": [{"severity": "warning", "message": 'No versions match range for com.b: "1 || 2"'}],
            },
            {"path": "Packages/b/package.json", "name": "com.b", "version": "", "issues": []},
        ]
    )
    text = render_summary(report)

    assert text.startswith("# vpm-validator Summary\n")
    assert "Manifests: 2 | Errors: 0 | Warnings: 1 | Info: 0" in text
    assert '| Packages/a/package.json | com.a 1.0.0 | warning | No versions match range for com.b: "1 \\|\\| 2" |' in text
    assert "| Packages/b/package.json | com.b | ok | No issues |" in text


def test_render_summary_without_manifests() -> None:
    text = render_summary(aggregate([]))
    assert "| (no manifests scanned) | n/a | ok | No issues |" in text


def test_render_summary_lists_skipped_index_entries() -> None:
    report = aggregate(
        [],
        {"packages": 1, "versions": 1, "skipped": ["com.a@2.0.0: manifest is not an object"]},
    )
    assert report["catalog"]["skipped"] == ["com.a@2.0.0: manifest is not an object"]

    text = render_summary(report)
    assert "## Skipped index entries (1)" in text
    assert "- com.a@2.0.0: manifest is not an object" in text


def test_render_summary_omits_empty_skipped_section() -> None:
    report = aggregate([], {"packages": 1, "versions": 1, "skipped": []})
    assert "Skipped index entries" not in render_summary(report)
