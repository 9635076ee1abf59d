from __future__ import annotations

from pydantic import BaseModel

from application.service import Service
from domain.actions import ActionKind
from domain.exceptions import StepFailure
from domain.steps import CallStep, ContractStep, LockStep, ModelStep, PolicyStep, TryStep
from infrastructure.locks.in_memory_lock_store import InMemoryLockStore
from tests.fake_service import RecordingLogger


class Params(BaseModel):
    post_id: int


POSTS = {1: {"id": 1, "title": "first"}}


def _service(lock_store=None, save=None, logger=None) -> Service:
    return Service(
        "update_post",
        [
            ContractStep(schema=Params),
            ModelStep(name="post", fetch=lambda ctx: POSTS.get(ctx["params"].post_id)),
            PolicyStep(name="can_edit", check=lambda ctx: ctx.get("user") == "admin"),
            LockStep(
                keys=("post", "edit"),
                steps=[TryStep(steps=[CallStep("save", fn=save or (lambda ctx: {"saved": True}))])],
            ),
        ],
        lock_store=lock_store or InMemoryLockStore(),
        logger=logger,
    )


def _register(fired):
    def register(actions):
        actions.on_success(lambda _: fired.append("success"))
        actions.on_failed_contract(handler=lambda _: fired.append("contract"))
        actions.on_model_not_found("post", handler=lambda _: fired.append("not_found"))
        actions.on_failed_policy("can_edit", handler=lambda _: fired.append("policy"))
        actions.on_lock_not_acquired("post", "edit", handler=lambda _: fired.append("lock"))
        actions.on_exceptions(ConnectionError, handler=lambda e: fired.append(("exception", str(e))))
        actions.on_failed_step("save", handler=lambda node: fired.append(("step", node.message)))
        actions.on_failure(lambda _: fired.append("failure"))

    return register


def test_execute_returns_frozen_tree() -> None:
    tree = _service().execute({"params": {"post_id": 1}, "user": "admin"})

    assert tree.succeeded is True
    assert tree.fragment("saved") is True
    assert tree.fragment("post") == {"id": 1, "title": "first"}
    assert tree.lookup(("result", "lock", "post:edit")).succeeded is True


def test_call_without_register_executes() -> None:
    tree = _service().call({"params": {"post_id": 1}, "user": "admin"})
    assert tree.succeeded is True


def test_success_dispatch() -> None:
    fired = []
    outcome = _service().call({"params": {"post_id": 1}, "user": "admin"}, register=_register(fired))
    assert fired == ["success"]
    assert outcome.matched.kind is ActionKind.ON_SUCCESS


def test_contract_failure_dispatch() -> None:
    fired = []
    _service().call({"params": {"post_id": "nope"}}, register=_register(fired))
    assert fired == ["contract"]


def test_model_not_found_dispatch() -> None:
    fired = []
    _service().call({"params": {"post_id": 404}, "user": "admin"}, register=_register(fired))
    assert fired == ["not_found"]


def test_policy_failure_dispatch() -> None:
    fired = []
    _service().call({"params": {"post_id": 1}, "user": "guest"}, register=_register(fired))
    assert fired == ["policy"]


def test_lock_not_acquired_dispatch() -> None:
    store = InMemoryLockStore()
    store.acquire("post:edit")
    fired = []
    _service(lock_store=store).call({"params": {"post_id": 1}, "user": "admin"}, register=_register(fired))
    assert fired == ["lock"]


def test_caught_exception_dispatch() -> None:
    def save(ctx):
        raise ConnectionError("db down")

    fired = []
    _service(save=save).call({"params": {"post_id": 1}, "user": "admin"}, register=_register(fired))
    assert fired == [("exception", "db down")]


def test_uncaught_exception_type_falls_back_to_on_failure() -> None:
    def save(ctx):
        raise TimeoutError("slow")

    fired = []
    _service(save=save).call({"params": {"post_id": 1}, "user": "admin"}, register=_register(fired))
    assert fired == ["failure"]


def test_failed_step_dispatch() -> None:
    def save(ctx):
        raise StepFailure("read only")

    fired = []
    _service(save=save).call({"params": {"post_id": 1}, "user": "admin"}, register=_register(fired))
    assert fired == [("step", "read only")]


def test_service_logs_with_service_name() -> None:
    logger = RecordingLogger()
    _service(logger=logger).call({"params": {"post_id": 1}, "user": "admin"}, register=lambda a: None)

    step_events = [f for _, e, f in logger.events if e == "step.start"]
    assert step_events
    assert all(f["service"] == "update_post" for f in step_events)
    assert "runner.dispatch.unmatched" in logger.names()
