# tests/core/context/test_generation_context.py
"""
Testes de logging estruturado e coleta de warnings no GenerationContext.

Invariantes:
    - `run_id` está presente em todos os eventos
    - Warnings são agrupados por estágio, na ordem de inserção
"""

from ztp_siteconfig.core.context import new_context


def test_structured_log_event(gen_ctx):
    gen_ctx.log(stage="merge.manifests", level="INFO", message="hello", role="master")

    ev = gen_ctx.events[-1]
    assert ev["run_id"] == "run-test-001"
    assert ev["stage"] == "merge.manifests"
    assert ev["level"] == "INFO"
    assert ev["message"] == "hello"
    assert ev["role"] == "master"
    assert ev["timestamp"].endswith("+00:00")


def test_warning_collection(gen_ctx):
    gen_ctx.add_warning(stage="annotations", message="first")
    gen_ctx.add_warning(stage="annotations", message="second")
    assert gen_ctx.warnings == {"annotations": ["first", "second"]}


def test_new_context_is_isolated():
    a = new_context(base_config={"osImageURL": "x"})
    b = new_context()

    a.log(stage="s", level="INFO", message="m")

    assert a.run_id != b.run_id
    assert a.base_config == {"osImageURL": "x"}
    assert b.events == []
    assert a.created_at.tzinfo is not None
