#!/usr/bin/env python3
"""
School authorization policy - CLI.
Query the rule table from a shell, or serve it over HTTP.
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, Optional

# Configure logging
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "WARNING").upper(), logging.WARNING),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, sort_keys=False))


def evaluate_command(kind: str, creator: bool, role: Optional[str]) -> Dict[str, Any]:
    from schoolpolicy.authz.evaluator import explain
    from schoolpolicy.core.models import describe
    from schoolpolicy.core.roles import parse_role

    ctx = describe(kind, is_creator=creator)
    decision = explain(ctx, role)
    r = parse_role(role)
    return {
        "kind": ctx.entity_kind.value,
        "creator": ctx.is_creator,
        "role": r.value if r else None,
        "actions": sorted(a.value for a in decision.actions),
        "matched_rules": list(decision.matched_rules),
    }


def view_command(role: Optional[str]) -> Dict[str, Any]:
    from schoolpolicy.dashboard.selector import select_view

    view = select_view(role)
    return {
        "role": view.role.value if view.role else None,
        "widgets": [w.value for w in view.widgets],
        "stats": [s.value for s in view.stats],
        "data_sources": sorted(d.value for d in view.data_sources),
    }


def nav_command(role: Optional[str]) -> Dict[str, Any]:
    from schoolpolicy.dashboard.navigation import visible_sections

    return {"sections": [s.value for s in visible_sections(role)]}


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Query the school role-and-ownership authorization policy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Which chat actions may a student take in a group chat they did not create?
  python main.py --evaluate group --role student

  # Dashboard content for a super admin
  python main.py --view super_admin

  # Serve the policy over HTTP
  python main.py --serve --port 8080
        """,
    )
    parser.add_argument("--evaluate", metavar="KIND", help="Evaluate chat actions for an entity kind (private|group)")
    parser.add_argument("--creator", action="store_true", help="Actor created the entity (used with --evaluate)")
    parser.add_argument("--role", help="Active role of the actor (used with --evaluate)")
    parser.add_argument("--view", metavar="ROLE", help="Print the dashboard view descriptor for a role")
    parser.add_argument("--nav", metavar="ROLE", help="Print visible sidebar sections for a role")
    parser.add_argument("--list-rules", action="store_true", help="Print the policy rule table")
    parser.add_argument("--serve", action="store_true", help="Run the HTTP policy server")
    parser.add_argument("--host", default="0.0.0.0", help="Server bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8080, help="Server listen port (default: 8080)")

    args = parser.parse_args(argv)

    if args.serve:
        from schoolpolicy.api.server import run

        run(host=args.host, port=args.port)
        return 0

    if args.evaluate:
        from schoolpolicy.core.models import UnknownEntityKindError

        try:
            _print_json(evaluate_command(args.evaluate, args.creator, args.role))
        except UnknownEntityKindError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        return 0

    if args.view is not None:
        _print_json(view_command(args.view))
        return 0

    if args.nav is not None:
        _print_json(nav_command(args.nav))
        return 0

    if args.list_rules:
        from schoolpolicy.api.server import rule_table_json

        _print_json(rule_table_json())
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
