import json

import pytest

from pmf import cli


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PMF_CATALOG_PATH", raising=False)
    monkeypatch.delenv("PMF_EXPAND_ENTITIES", raising=False)
    monkeypatch.delenv("PMF_CONTAINER_WIDTH", raising=False)
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)


def test_list_prints_sample_workflows(capsys):
    assert cli.main(["list"]) == 0
    out = capsys.readouterr().out
    assert "hypo-loan-position\tHypo Loan Position" in out
    assert "loan-commitment" in out


def test_render_outputs_graph_json(capsys):
    assert cli.main(["render", "loan-commitment", "--width", "800"]) == 0
    payload = json.loads(capsys.readouterr().out)

    assert payload["workflowId"] == "loan-commitment"
    stages = [node for node in payload["nodes"] if node["kind"] == "stage"]
    assert [stage["x"] for stage in stages] == [30, 290, 550]
    assert [edge["id"] for edge in payload["edges"]] == [
        "receive-to-received",
        "validate-to-validated",
        "publish-to-published",
        "received-to-validate",
        "validated-to-publish",
    ]
    assert any(node["kind"] == "entity" for node in payload["nodes"])


def test_render_collapsed(capsys):
    assert cli.main(["render", "hypo-loan-position", "--collapsed"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert not any(node["kind"] == "entity" for node in payload["nodes"])


def test_render_unknown_workflow(capsys):
    assert cli.main(["render", "nope"]) == 1
    assert "No workflow found" in capsys.readouterr().err
