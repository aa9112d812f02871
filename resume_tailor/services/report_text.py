from typing import List, Sequence

from resume_tailor.models.report import MatchReport

REPORT_FILENAME = "ats-report.txt"


def _section(title: str, items: Sequence[str]) -> List[str]:
    lines = [title, "-" * len(title)]
    if items:
        lines.extend(f"- {item}" for item in items)
    else:
        lines.append("(none)")
    lines.append("")
    return lines


def render_report(report: MatchReport) -> str:
    """Plain-text version of a match report, for download."""
    lines = [
        "ATS COMPATIBILITY REPORT",
        "========================",
        "",
        f"Score: {report.score}/100",
        "",
        "Summary",
        "-------",
        report.summary,
        "",
    ]
    lines += _section("Strengths", report.strengths)
    lines += _section("Improvements", report.improvements)
    lines += _section("Recommendations", report.recommendations)
    lines += _section("Matched Keywords", report.matched_keywords)
    lines += _section("Missing Keywords", report.missing_keywords)
    return "\n".join(lines).rstrip("\n") + "\n"
