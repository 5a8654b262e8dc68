"""CLI-friendly rendering for revision comparison results."""

from __future__ import annotations

from revisionpack.compare.models import DiffResult, RevisionComparison

_CHANGE_PREFIXES = {"normal": " ", "insert": "+", "delete": "-"}


def render_comparison_summary(comparison: RevisionComparison) -> str:
    summary = comparison.summary()
    return (
        f"old={comparison.old_revision.id or '<none>'} "
        f"new={comparison.new_revision.id or '<none>'} "
        f"unchanged={summary['unchanged']} added={summary['added']} "
        f"removed={summary['removed']} moved={summary['movedHere']}"
    )


def render_diff_lines(diff: DiffResult, *, max_lines: int = 20, changed_only: bool = False) -> list[str]:
    lines: list[str] = []
    total = 0
    for hunk in diff.hunks:
        for change in hunk.changes:
            if changed_only and change.is_normal:
                continue
            total += 1
            if len(lines) < max_lines:
                lines.append(f"{_CHANGE_PREFIXES[change.kind]}{change.content}")
    if total > len(lines):
        lines.append(f"... {total - len(lines)} additional line(s) not shown")
    return lines


def render_comparison(comparison: RevisionComparison, *, max_lines: int = 20) -> str:
    lines: list[str] = [render_comparison_summary(comparison)]

    if comparison.metadata.diff.has_changes:
        lines.append("metadata: modified")
        lines.extend(
            f"  {line}"
            for line in render_diff_lines(comparison.metadata.diff, max_lines=max_lines, changed_only=True)
        )

    for section in comparison.sections:
        header = f"[{section.change_type}] {section.section_key} ({section.section_type})"
        if section.target_key:
            header = f"{header} -> {section.target_key}"
        lines.append(header)
        if section.change_type == "unchanged" and not section.diff.has_changes:
            continue
        if section.change_type in ("movedUp", "movedDown"):
            continue
        lines.extend(
            f"  {line}"
            for line in render_diff_lines(
                section.diff,
                max_lines=max_lines,
                changed_only=section.change_type in ("unchanged", "movedHere"),
            )
        )

    if comparison.diagnostics:
        lines.append(f"diagnostics: {len(comparison.diagnostics)}")
        for diagnostic in comparison.diagnostics:
            lines.append(
                f"  [{diagnostic.stage}] {diagnostic.section_key or '<metadata>'}: "
                f"{diagnostic.error_type}: {diagnostic.message}"
            )

    return "\n".join(lines)
