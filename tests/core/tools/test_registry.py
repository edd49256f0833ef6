# tests/core/tools/test_registry.py
"""
Testes do ToolRegistry e do contrato de tool adapter.

Os testes asseguram que:
- adapters são resolvidos por `tool_id`
- `tool_id` duplicado é rejeitado no registro
- a ordem de inserção é preservada
- adapters sem `tool_id` ou sem `run` são rejeitados
- `ToolResult.ok` / `ToolResult.fail` produzem resultados coerentes

Decisões arquiteturais:
    - Conformidade com o contrato é garantida por duck typing
    - Erros de registro são falhas fatais, antes de qualquer run
"""

import pytest

try:
    from docflow.core.tools.adapter import ToolAdapter, ToolResult
    from docflow.core.tools.registry import DuplicateToolIdError, ToolNotFoundError, ToolRegistry
    from docflow.core.workflow.types import RawArtifact
except Exception as e:  # noqa: BLE001
    ToolRegistry = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"""Missing tools package. Implement:
- src/docflow/core/tools/adapter.py (ToolAdapter, ToolResult)
- src/docflow/core/tools/registry.py (ToolRegistry)
Import error: {_IMPORT_ERR}
""")


def test_registry_add_get_list(FakeTool):
    _require_imports()
    merge = FakeTool("merge")
    split = FakeTool("split")
    reg = ToolRegistry()

    reg.add(split)
    reg.add(merge)

    assert reg.has("merge") is True
    assert reg.has("zip") is False
    assert reg.get("merge") is merge
    assert reg.list() == [split, merge]


def test_registry_rejects_duplicate_tool_id(FakeTool):
    _require_imports()
    reg = ToolRegistry()
    reg.add(FakeTool("merge"))
    with pytest.raises(DuplicateToolIdError):
        reg.add(FakeTool("merge"))


def test_registry_get_unknown_raises():
    _require_imports()
    with pytest.raises(ToolNotFoundError):
        ToolRegistry().get("ocr")


def test_registry_rejects_malformed_adapters():
    _require_imports()

    class NoId:
        tool_id = ""

        def run(self, inputs, config, on_progress, cancel_token):
            return ToolResult.ok([])

    class NoRun:
        tool_id = "norun"

    reg = ToolRegistry()
    with pytest.raises(ValueError):
        reg.add(NoId())
    with pytest.raises(TypeError):
        reg.add(NoRun())


def test_fake_tool_satisfies_protocol(FakeTool):
    _require_imports()
    assert isinstance(FakeTool("merge"), ToolAdapter)


def test_tool_result_factories():
    _require_imports()
    out = [RawArtifact(blob=b"x")]

    ok = ToolResult.ok(out, pages=3)
    failed = ToolResult.fail("Invalid password")

    assert ok.success is True
    assert ok.outputs == out
    assert ok.outputs is not out
    assert ok.metadata == {"pages": 3}
    assert failed.success is False
    assert failed.error == "Invalid password"
    assert failed.outputs == []
