from __future__ import annotations

import json

import pytest

from conftest import FakeCatalog, FakeLLM
from seecat_enrichment import cli
from seecat_enrichment.inference import OpenAIChatLLM
from seecat_enrichment.orchestrator import EnrichmentPipeline, PipelineOptions

build_from_settings = cli.build_pipeline


@pytest.fixture
def run_cli(monkeypatch, settings, taxonomy_store, spring_schema, spring_completion, capsys):
    monkeypatch.setattr(cli, "get_settings", lambda: settings)
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)

    def factory(resolved):
        return EnrichmentPipeline(FakeCatalog(spring_schema), FakeLLM(spring_completion), taxonomy_store, PipelineOptions(), resolved)

    monkeypatch.setattr(cli, "build_pipeline", factory)

    def _run(*argv: str) -> tuple[int, object]:
        code = cli.main(list(argv))
        return code, json.loads(capsys.readouterr().out)

    return _run


def test_enrich_prints_record(run_cli):
    code, payload = run_cli("enrich", "-m", "Spring compression SS 2x20x50", "-c", "MC-0107")
    assert code == 0
    assert list(payload)[-2:] == ["X_CATEGORY", "X_UNSPC"]
    assert payload["X_UNSPC"]["CLASS"] == "31161900"


def test_missing_parameter_exit_status(run_cli):
    code, payload = run_cli("enrich", "-c", "MC-0107")
    assert code == 2
    assert payload == {
        "error": "Missing required parameters: material_name",
        "kind": "missing_parameter",
        "retryable": False,
    }


def test_lookup_commands(run_cli):
    assert run_cli("attributes", "-c", "MC-0107")[1][:2] == ["NOUN", "MODIFIER"]
    assert run_cli("identity", "-c", "MC-0107")[1] == {"NOUN": "SPRING", "MODIFIER": "COMPRESSION"}
    assert run_cli("taxonomy-search", "--code", "3116")[1][0] == {"code": "31160000", "name": "Hardware"}
    assert "data" in run_cli("category")[1]


def test_other_failures_exit_one(monkeypatch, run_cli):
    monkeypatch.setattr(
        cli,
        "build_pipeline",
        lambda resolved: EnrichmentPipeline(FakeCatalog({"status": "ok"}), FakeLLM(None), {}, PipelineOptions(), resolved),
    )
    code, payload = run_cli("enrich", "-m", "Spring", "-c", "MC-0107")
    assert code == 1
    assert payload["kind"] == "schema_format"


@pytest.fixture
def without_openai_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


def test_lookup_commands_need_no_model_credentials(monkeypatch, run_cli, settings, tmp_path, without_openai_key):
    path = tmp_path / "unspsc.json"
    path.write_text(json.dumps({"31160000": "Hardware", "31161900": "Springs"}), encoding="utf-8")
    configured = settings.model_copy(update={"taxonomy_store_path": path})
    monkeypatch.setattr(cli, "get_settings", lambda: configured)
    monkeypatch.setattr(cli, "build_pipeline", build_from_settings)

    code, payload = run_cli("taxonomy-search", "--code", "3116")
    assert code == 0
    assert payload == [{"code": "31160000", "name": "Hardware"}, {"code": "31161900", "name": "Springs"}]


def test_enrich_without_model_credentials_is_a_structured_error(
    monkeypatch, run_cli, taxonomy_store, spring_schema, without_openai_key
):
    monkeypatch.setattr(
        cli,
        "build_pipeline",
        lambda resolved: EnrichmentPipeline(
            FakeCatalog(spring_schema), OpenAIChatLLM(resolved), taxonomy_store, PipelineOptions(), resolved
        ),
    )
    code, payload = run_cli("enrich", "-m", "Spring", "-c", "MC-0107")
    assert code == 1
    assert payload["kind"] == "configuration"
    assert payload["retryable"] is False


def test_missing_taxonomy_store_file_is_a_structured_error(monkeypatch, run_cli, settings, tmp_path):
    configured = settings.model_copy(update={"taxonomy_store_path": tmp_path / "absent.csv"})
    monkeypatch.setattr(cli, "get_settings", lambda: configured)
    monkeypatch.setattr(cli, "build_pipeline", build_from_settings)

    code, payload = run_cli("attributes", "-c", "MC-0107")
    assert code == 1
    assert payload["kind"] == "configuration"
    assert "absent.csv" in payload["error"]
