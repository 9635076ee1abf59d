#!/usr/bin/env python3
"""
Outcome dispatch demo

Usage:
  python scripts/demo_run.py [--title <title>] [--missing] [--locked] [--boom]

Examples:
  python scripts/demo_run.py --title "Hello"
  python scripts/demo_run.py --title ""          # contract failure
  python scripts/demo_run.py --missing           # model not found
  python scripts/demo_run.py --locked            # lock not acquired
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# プロジェクトルートをPYTHONPATHに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pydantic import BaseModel, Field

from application.runner.runner import run_service
from application.service import Service
from domain.actions import ActionKind
from domain.steps import CallStep, ContractStep, LockStep, ModelStep, PolicyStep, TryStep
from infrastructure.config.settings import build_logger, load_settings
from infrastructure.locks.in_memory_lock_store import InMemoryLockStore


class RenamePostParams(BaseModel):
    post_id: int
    title: str = Field(min_length=1)


POSTS = {1: {"id": 1, "title": "First post"}}


def build_service(lock_store: InMemoryLockStore, logger, boom: bool) -> Service:
    def save(ctx):
        if boom:
            raise ConnectionError("database unavailable")
        ctx["post"]["title"] = ctx["params"].title
        return {"saved_title": ctx["params"].title}

    return Service(
        "rename_post",
        [
            ContractStep(schema=RenamePostParams),
            ModelStep(name="post", fetch=lambda ctx: POSTS.get(ctx["params"].post_id)),
            PolicyStep(name="can_edit", check=lambda ctx: ctx.get("user") == "admin", reason="Only admins may rename"),
            LockStep(
                keys=("post", "rename"),
                steps=[TryStep(steps=[CallStep("save", fn=save)])],
            ),
        ],
        lock_store=lock_store,
        logger=logger,
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run a service and dispatch on its outcome")
    parser.add_argument("--title", default="Renamed")
    parser.add_argument("--user", default="admin")
    parser.add_argument("--missing", action="store_true", help="Request a post that does not exist")
    parser.add_argument("--locked", action="store_true", help="Hold the post lock before running")
    parser.add_argument("--boom", action="store_true", help="Make the save step raise")
    args = parser.parse_args(argv)

    settings = load_settings()
    logger = build_logger(settings)

    lock_store = InMemoryLockStore()
    if args.locked:
        lock_store.acquire("post:rename")

    service = build_service(lock_store, logger, args.boom)
    params = {"post_id": 999 if args.missing else 1, "title": args.title}

    def register(actions):
        actions.on_success(lambda _, saved_title: print(f"renamed to {saved_title!r}"), inputs=("saved_title",))
        actions.on_failed_contract(handler=lambda node: print(f"invalid params: {node.message}"))
        actions.on_model_not_found("post", handler=lambda node: print("post not found"))
        actions.on_failed_policy("can_edit", handler=lambda node: print(f"denied: {node.message}"))
        actions.on_lock_not_acquired("post", "rename", handler=lambda node: print("post is busy"))
        actions.on_exceptions(ConnectionError, handler=lambda exc: print(f"retry later: {exc}"))
        actions.on_failure(lambda node: print(f"failed: {node.message}"))

    outcome = run_service(service, register, dependencies={"params": params, "user": args.user}, logger=logger)
    return 0 if outcome.matched is not None and outcome.matched.kind is ActionKind.ON_SUCCESS else 1


if __name__ == "__main__":
    sys.exit(main())
