"""
Namesake MCP Server

Exposes the name similarity engine as tools that AI agents can invoke
via the Model Context Protocol, so an agent can check whether a name it
is about to introduce is confusingly close to an existing one.

Start with::

    namesake mcp                    # stdio transport
    namesake mcp --transport sse    # SSE transport

Or programmatically::

    from namesake.mcp.server import create_server
    server = create_server()
    server.run()
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Annotated

# FastMCP uses pydantic for validation, so Field should be available
from pydantic import Field  # type: ignore[import-untyped]

from namesake.core.config import NamesakeConfig
from namesake.core.matcher import Name, ScopeMatcher, compare
from namesake.core.pipeline import DetectionPipeline
from namesake.core.reporter import ResultFormatter

logger = logging.getLogger(__name__)


# ==================================================================
# Tool bodies (plain functions so they can run without a server)
# ==================================================================

def compare_payload(cfg: NamesakeConfig, first: str, second: str) -> dict:
    result = compare(first, second, cfg.similarity_threshold)
    return {
        "first": result.first,
        "second": result.second,
        "score": result.score,
        "percentage": int(100 * result.score),
        "evidence": result.evidence,
        "threshold": result.threshold,
        "exceeds_threshold": result.exceeds_threshold,
    }


def find_similar_payload(cfg: NamesakeConfig, names: list[str]) -> dict:
    matcher = ScopeMatcher(cfg.similarity_threshold)
    matches = matcher.match([Name(str(n)) for n in names if str(n)])
    return {
        "threshold": matcher.threshold,
        "matches": [
            {
                "first": m.first.text,
                "second": m.second.text,
                "score": m.score,
                "percentage": m.percentage,
                "evidence": m.evidence,
            }
            for m in matches
        ],
    }


def resolve_path(path: str) -> Path:
    """When path is '.', use NAMESAKE_DEFAULT_PATH if set (e.g. /data in Docker)."""
    if path == ".":
        default = os.environ.get("NAMESAKE_DEFAULT_PATH", "").strip()
        if default:
            return Path(default).resolve()
    return Path(path).resolve()


def create_server(config: NamesakeConfig | None = None):
    """
    Build and return a configured FastMCP server instance.

    All tool invocations share one configuration.  Raises ``ImportError``
    if ``fastmcp`` is not installed (install via
    ``pip install 'namesake[mcp]'``).
    """
    from fastmcp import FastMCP  # type: ignore[import-untyped]

    cfg = config or NamesakeConfig.from_env()
    cfg.validate()

    mcp = FastMCP("Namesake")

    # ==================================================================
    # Tool: compare_names
    # ==================================================================

    @mcp.tool()
    def compare_names(
        first: Annotated[str, Field(description="First identifier name.")],
        second: Annotated[str, Field(description="Second identifier name.")],
    ) -> str:
        """Score how similar two identifier names are (0.0-1.0) and return
        one longest common subsequence as evidence.

        Returns:
            JSON object with score, percentage, evidence and whether the
            score exceeds the configured threshold.
        """
        try:
            return json.dumps(compare_payload(cfg, first, second))
        except Exception as e:
            return json.dumps({"error": str(e)})

    # ==================================================================
    # Tool: find_similar_names
    # ==================================================================

    @mcp.tool()
    def find_similar_names(
        names: Annotated[
            list[str],
            Field(description="Names that live in one scope, e.g. the locals of a function."),
        ],
    ) -> str:
        """Find pairs of names in one list that are confusingly similar.

        Returns:
            JSON object with the threshold and the matching pairs.
        """
        try:
            return json.dumps(find_similar_payload(cfg, names))
        except Exception as e:
            return json.dumps({"error": str(e), "matches": []})

    # ==================================================================
    # Tool: check_path
    # ==================================================================

    @mcp.tool()
    def check_path(
        path: Annotated[
            str,
            Field(default=".", description="Python file or directory to check. Defaults to the working directory."),
        ] = ".",
    ) -> str:
        """Check Python source for similar names bound in the same scope.

        Returns:
            JSON document with a summary and per-scope matches.
        """
        try:
            result = DetectionPipeline([resolve_path(path)], config=cfg).run()
            return ResultFormatter.format_json(result)
        except Exception as e:
            return json.dumps({"error": str(e), "reports": []})

    return mcp
