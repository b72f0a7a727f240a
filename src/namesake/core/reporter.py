"""
Namesake Reporter

Renders scan results for humans (console), for editors and CI logs
(compact, one line per pair), and for tools (JSON).
"""

import json
import shutil
from typing import Any, List

from namesake.core.matcher import MatchResult, Name
from namesake.core.pipeline import ScanResult, ScopeReport


def _describe_scope(scope: Any) -> str:
    label = getattr(scope, "label", None)
    if callable(label):
        return label()
    return str(scope)


def _scope_location(scope: Any) -> str:
    file_path = getattr(scope, "file_path", None)
    if file_path is None:
        return ""
    return f"{file_path}:{getattr(scope, 'line', '?')}"


def _describe_name(name: Name) -> str:
    origin = name.origin
    kind = getattr(origin, "kind", None)
    return f"{kind} {name.text}" if kind else name.text


def _name_location(name: Name) -> str:
    location = getattr(name.origin, "location", None)
    if callable(location):
        return location()
    return "" if name.origin is None else str(name.origin)


class ResultFormatter:
    """Format scan results for different output modes."""

    # ── Console (human-friendly) ──────────────────────────────────

    @staticmethod
    def format_console(result: ScanResult) -> str:
        """
        One banner per scope with matches, then for each pair the
        similarity percentage, both names with where they were bound,
        and one longest common subsequence.
        """
        if not result.reports:
            return "\n  No similar names found.\n"

        width = min(shutil.get_terminal_size().columns, 78)
        thin = "─" * width

        out: List[str] = []
        out.append(f"\n{thin}")
        out.append(
            f"  NAMESAKE — {result.matches_found} similar pair"
            f"{'s' if result.matches_found != 1 else ''} in {len(result.reports)} scope"
            f"{'s' if len(result.reports) != 1 else ''} "
            f"(threshold {result.threshold:.2f})"
        )
        out.append(thin)

        for report in result.reports:
            out.extend(ResultFormatter._console_scope(report, width))

        out.append(f"\n{thin}")
        return "\n".join(out)

    @staticmethod
    def _console_scope(report: ScopeReport, width: int) -> List[str]:
        lines = [""]
        scope_loc = _scope_location(report.scope)
        header = f"  Scope: {_describe_scope(report.scope)}"
        if scope_loc:
            header += f"  ({scope_loc})"
        lines.append(header)
        lines.append(f"  {'─' * (width - 2)}")
        for match in report.matches:
            lines.append(f"    [{match.percentage}% similarity]")
            for name in (match.first, match.second):
                lines.append(f"      {_describe_name(name):<32} {_name_location(name)}")
            lines.append(f"      Common : \"{match.evidence}\"")
        return lines

    # ── Compact (one line per pair) ───────────────────────────────

    @staticmethod
    def format_compact(result: ScanResult) -> str:
        """``file:line: first ~ second (NN%) common="..."`` per pair."""
        lines = []
        for report in result.reports:
            for match in report.matches:
                loc = _name_location(match.first) or _scope_location(report.scope)
                prefix = f"{loc}: " if loc else ""
                lines.append(
                    f"{prefix}{match.first.text} ~ {match.second.text} "
                    f"({match.percentage}%) common=\"{match.evidence}\""
                )
        return "\n".join(lines)

    # ── JSON ──────────────────────────────────────────────────────

    @staticmethod
    def _name_to_obj(name: Name) -> dict:
        origin = name.origin
        obj = {"name": name.text}
        for attr in ("kind", "file_path", "line", "column", "scope"):
            if hasattr(origin, attr):
                obj[attr] = getattr(origin, attr)
        return obj

    @staticmethod
    def _match_to_obj(match: MatchResult) -> dict:
        return {
            "first": ResultFormatter._name_to_obj(match.first),
            "second": ResultFormatter._name_to_obj(match.second),
            "score": match.score,
            "percentage": match.percentage,
            "evidence": match.evidence,
        }

    @staticmethod
    def format_json(result: ScanResult) -> str:
        """Format a scan as a JSON document with a summary and per-scope matches."""
        reports = []
        for report in result.reports:
            scope = report.scope
            reports.append({
                "scope": _describe_scope(scope),
                "file_path": getattr(scope, "file_path", None),
                "line": getattr(scope, "line", None),
                "matches": [ResultFormatter._match_to_obj(m) for m in report.matches],
            })
        doc = {
            "summary": {
                "files_scanned": result.files_scanned,
                "files_processed": result.files_processed,
                "scopes_examined": result.scopes_examined,
                "names_harvested": result.names_harvested,
                "matches_found": result.matches_found,
                "errors": result.errors,
                "threshold": result.threshold,
            },
            "reports": reports,
        }
        return json.dumps(doc, indent=2)
