"""
HTTP query surface for the authorization policy.

Identity is established upstream (session gateway) and forwarded as headers:
- X-User-Id: numeric user id
- X-User-Roles: comma-separated roles the user holds
- X-Active-Role: the role the user switched to (optional)

This server only answers "what may this actor see/do"; it stores nothing.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request

from schoolpolicy.authz.evaluator import explain
from schoolpolicy.authz.rules import RULE_TABLE
from schoolpolicy.chat.actions import context_menu, swipe_panel
from schoolpolicy.core.models import Actor, RoleAssignment, UnknownEntityKindError, describe
from schoolpolicy.core.roles import Role, RoleLike, active_role, is_admin, parse_role
from schoolpolicy.dashboard.navigation import visible_sections
from schoolpolicy.dashboard.selector import select_view

logger = logging.getLogger(__name__)

app = FastAPI(title="schoolpolicy")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming HTTP requests."""
    start_time = time.time()
    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.debug("%s %s - %d (%.3fs)", request.method, request.url.path, response.status_code, process_time)
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.exception("%s %s - ERROR after %.3fs: %s", request.method, request.url.path, process_time, str(e))
        raise


def _split_csv(raw: Optional[str]) -> List[str]:
    return [x.strip() for x in (raw or "").split(",") if x.strip()]


def current_actor(request: Request) -> Actor:
    raw_id = (request.headers.get("x-user-id") or "").strip()
    try:
        user_id = int(raw_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Unauthorized") from None

    roles: List[Role] = []
    for item in _split_csv(request.headers.get("x-user-roles")):
        r = parse_role(item)
        if r is None:
            logger.debug("Ignoring unknown role in X-User-Roles: %s", item)
            continue
        if r not in roles:
            roles.append(r)

    return Actor(
        id=user_id,
        role=roles[0] if roles else None,
        active_role=parse_role(request.headers.get("x-active-role")),
        assignments=[RoleAssignment(role=r) for r in roles],
    )


def current_role(actor: Actor = Depends(current_actor)) -> Optional[Role]:
    return active_role(actor)


def require_role(predicate: Callable[[RoleLike], bool], *, name: str = "") -> Callable[..., Role]:
    """Dependency factory: pass only when the actor's active role satisfies `predicate`."""

    def _dep(actor: Actor = Depends(current_actor)) -> Role:
        role = active_role(actor)
        if role is None or not predicate(role):
            logger.info(
                "Forbidden: user=%s role=%s check=%s",
                actor.id,
                role.value if role else "-",
                name or getattr(predicate, "__name__", "?"),
            )
            raise HTTPException(status_code=403, detail="Forbidden - Insufficient permissions")
        return role

    return _dep


@app.get("/healthz")
def healthz() -> Dict[str, Any]:
    return {"ok": True}


@app.get("/api/authz/chat-actions")
def chat_actions(
    kind: str = Query(...),
    creator: bool = Query(False),
    role: Optional[Role] = Depends(current_role),
) -> Dict[str, Any]:
    try:
        ctx = describe(kind, is_creator=creator)
    except UnknownEntityKindError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None

    decision = explain(ctx, role)
    panel = swipe_panel(ctx, role)
    return {
        "kind": ctx.entity_kind.value,
        "creator": ctx.is_creator,
        "role": role.value if role else None,
        "actions": sorted(a.value for a in decision.actions),
        "matchedRules": list(decision.matched_rules),
        "menu": [e.model_dump(mode="json") for e in context_menu(ctx, role)],
        "swipe": {"actions": [a.value for a in panel.actions], "revealOffset": panel.reveal_offset},
    }


@app.get("/api/dashboard/view")
def dashboard_view(role: Optional[Role] = Depends(current_role)) -> Dict[str, Any]:
    view = select_view(role)
    return {
        "role": view.role.value if view.role else None,
        "widgets": [w.value for w in view.widgets],
        "stats": [s.value for s in view.stats],
        "dataSources": sorted(d.value for d in view.data_sources),
    }


@app.get("/api/navigation")
def navigation(role: Optional[Role] = Depends(current_role)) -> Dict[str, Any]:
    return {"sections": [s.value for s in visible_sections(role)]}


@app.get("/api/authz/rules")
def list_rules(_role: Role = Depends(require_role(is_admin, name="is_admin"))) -> Dict[str, Any]:
    return {"rules": rule_table_json()}


def rule_table_json() -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for kind, family in RULE_TABLE.items():
        for rule in family:
            out.append(
                {
                    "name": rule.name,
                    "kind": kind.value,
                    "grants": sorted(a.value for a in rule.grants),
                    "denies": sorted(a.value for a in rule.denies),
                    "description": rule.description,
                }
            )
    return out


def run(host: str = "0.0.0.0", port: int = 8080) -> None:
    import uvicorn

    log_level = os.getenv("LOG_LEVEL", "info").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    uvicorn_log_level = (
        log_level.lower() if log_level.lower() in ["critical", "error", "warning", "info", "debug", "trace"] else "info"
    )

    logger.info("Starting policy server on %s:%d (log_level=%s)", host, port, log_level)
    uvicorn.run(app, host=host, port=port, log_level=uvicorn_log_level)
