# tests/exporters/test_json_exporter.py

import json

from kubefit.exporters.json_exporter import JSONExporter


async def test_json_exporter_writes_full_report(tmp_path, sample_report):
    out = tmp_path / "report.json"

    written = await JSONExporter().export(sample_report, str(out))

    assert written == str(out)
    document = json.loads(out.read_text(encoding="utf-8"))
    assert [node["snapshot"]["name"] for node in document["nodes"]] == ["cpu-node", "gpu-node"]
    assert document["nodes"][0]["verdict"]["label"] == "NO (InsufficientCPU)"
    assert document["nodes"][0]["verdict"]["reasons"] == ["InsufficientCPU"]
    assert document["nodes"][0]["snapshot"]["available"] == {"cpu": 50, "memory": 3904, "pods": 80}
    assert document["nodes"][0]["overprovisioning"]["entries"][0]["name"] == "reporting-0"
    assert document["nodes"][1]["overprovisioning"] is None
    assert [row["node"] for row in document["summary"]] == ["gpu-node", "cpu-node"]
    assert document["taint_legend"] == [{"key": "dedicated", "value": None, "effect": "NoSchedule"}]
    assert document["recommended_priority_class"] == "system-node-critical"
    assert document["request"]["cpu"] == 100


async def test_json_exporter_default_path(tmp_path, monkeypatch, sample_report):
    monkeypatch.chdir(tmp_path)

    written = await JSONExporter().export(sample_report)

    assert written == "kubefit-report.json"
    assert (tmp_path / "kubefit-report.json").exists()


async def test_json_exporter_creates_parent_directories(tmp_path, sample_report):
    out = tmp_path / "nested" / "dir" / "report.json"

    await JSONExporter().export(sample_report, str(out))

    assert out.exists()
