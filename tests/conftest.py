"""
Pytest config.

Pins the repo root on sys.path so `import schoolpolicy` and `import main` work
without installing the package, and resets the cached env-driven policy so
tests that set AUTHZ_* vars do not leak into each other.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()


@pytest.fixture(autouse=True)
def _reset_authz_policy_cache(monkeypatch: pytest.MonkeyPatch):
    from schoolpolicy.authz.policy import load_authz_policy

    monkeypatch.delenv("AUTHZ_ACTION_DENYLIST", raising=False)
    monkeypatch.delenv("AUTHZ_AUDIT_DECISIONS", raising=False)
    load_authz_policy.cache_clear()
    yield
    load_authz_policy.cache_clear()
