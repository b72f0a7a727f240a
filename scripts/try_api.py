#!/usr/bin/env python3
"""
Manually try the Namesake Python API against an example repository.

This script checks a directory for similar names, prints the per-scope
report, and runs a few string comparisons so you can see check(),
compare() and match() in action.

Usage:
  # From project root (check this repo's src/)
  python scripts/try_api.py
  python scripts/try_api.py src

  # Use another repo as the example
  python scripts/try_api.py /path/to/your/project

  # Lower the threshold to see more pairs
  python scripts/try_api.py src --threshold 0.6

Requirements:
  - Namesake installed (pip install -e . from project root)
"""

import sys
from pathlib import Path

_project_root = Path(__file__).resolve().parent.parent
_src = _project_root / "src"
if _src.exists() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))


def main() -> None:
    import argparse
    from namesake import ConfigError, Namesake
    from namesake.core.reporter import ResultFormatter

    parser = argparse.ArgumentParser(
        description="Manually test Namesake API: check a directory and compare names.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default="src",
        type=Path,
        help="Directory to check (default: src)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Similarity threshold in (0, 1]",
    )
    args = parser.parse_args()

    root = args.path.resolve()
    if not root.exists():
        if args.path == Path("src"):
            root = Path(".").resolve()
        else:
            print(f"Error: path does not exist: {args.path}")
            sys.exit(1)

    overrides = {}
    if args.threshold is not None:
        overrides["similarity_threshold"] = args.threshold
    try:
        client = Namesake(**overrides)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    # ── Check ─────────────────────────────────────────────────────
    print("=" * 60)
    print("  STEP 1: Check")
    print("=" * 60)
    print(f"  Path: {root}\n")

    result = client.check(root, show_progress=True)
    print(f"\n  Result: {result.files_processed} files, "
          f"{result.scopes_examined} scopes, "
          f"{result.names_harvested} names, "
          f"{result.matches_found} similar pairs, "
          f"{result.errors} errors.")
    print(ResultFormatter.format_console(result))

    # ── Compare ───────────────────────────────────────────────────
    print("\n" + "=" * 60)
    print("  STEP 2: Compare")
    print("=" * 60)

    for first, second in [
        ("ALEXANDRE", "ALEKSANDER"),
        ("customer_name", "customer_names"),
        ("buffer", "fer"),
    ]:
        cmp = client.compare(first, second)
        flag = "  (above threshold)" if cmp.exceeds_threshold else ""
        print(f"  {first} ~ {second}: {cmp.score:.2f}  common=\"{cmp.evidence}\"{flag}")

    # ── Match ─────────────────────────────────────────────────────
    print("\n" + "=" * 60)
    print("  STEP 3: Match a list of names")
    print("=" * 60)

    names = ["user_id", "user_ids", "userid", "session", "sessions_count"]
    print(f"  Names: {names}\n")
    for m in client.match(names):
        print(f"    {m.first.text} ~ {m.second.text}  [{m.percentage}%]  \"{m.evidence}\"")

    print("\n" + "=" * 60)
    print("  Done. Try your own names in Python:")
    print("    from namesake import Namesake")
    print("    client = Namesake()")
    print("    client.compare('first_name', 'firstname')")
    print("=" * 60)


if __name__ == "__main__":
    main()
