"""Architecture tests: vendor imports stay in the modules that own them."""

from pathlib import Path

SRC = Path(__file__).resolve().parent.parent / "src" / "flyhttp"


def _modules_importing(name: str) -> list[str]:
    hits = []
    for path in sorted(SRC.rglob("*.py")):
        text = path.read_text()
        if f"import {name}" in text or f"from {name} " in text or f"from {name}." in text:
            hits.append(path.relative_to(SRC).as_posix())
    return hits


class TestVendorIsolation:
    def test_httpx_only_in_client_adapters(self):
        assert _modules_importing("httpx") == ["client/adapters/httpx_adapter.py"]

    def test_yaml_only_in_config(self):
        assert _modules_importing("yaml") == ["core/config.py"]

    def test_kernel_has_no_third_party_imports(self):
        for name in ("httpx", "yaml", "pydantic", "structlog"):
            assert not [m for m in _modules_importing(name) if m.startswith("kernel/")]
