# -*- coding: utf-8 -*-
"""
测试：命令行入口
"""
import json
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from citeparse.cli import main


def test_cli_outputs_json(tmp_path, capsys):
    """输出完整结果 JSON"""
    path = tmp_path / "paper.md"
    path.write_text("See [@doe2020, p. 12] and [@fig:plot1].\n", encoding="utf-8")

    assert main([str(path)]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["success"] is True
    assert output["keys"] == ["doe2020", "plot1"]


def test_cli_crossref_only(tmp_path, capsys):
    """--crossref 只输出渲染结果"""
    path = tmp_path / "paper.md"
    path.write_text("See [@doe2020] and [@fig:plot1].\n", encoding="utf-8")

    assert main([str(path), "--crossref"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert [r["val"] for r in output] == ["[Figure plot1]"]


def test_cli_extra_terms(tmp_path, capsys):
    """--terms 合并额外的定位标签表"""
    terms = tmp_path / "terms.json"
    terms.write_text(json.dumps({"de-DE": {"S.": "page"}}), encoding="utf-8")
    path = tmp_path / "paper.md"
    path.write_text("Siehe [@doe, S. 5].\n", encoding="utf-8")

    assert main([str(path), "--terms", str(terms), "--locale", "de-DE"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["groups"][0]["citations"] == [{"id": "doe", "locator": "5", "label": "page"}]


def test_cli_failures(tmp_path):
    """文件不存在或标签表非法时返回 1"""
    assert main([str(tmp_path / "missing.md")]) == 1

    terms = tmp_path / "terms.json"
    terms.write_text("[1, 2]", encoding="utf-8")
    path = tmp_path / "paper.md"
    path.write_text("@doe\n", encoding="utf-8")
    assert main([str(path), "--terms", str(terms)]) == 1


if __name__ == "__main__":
    import pytest

    sys.exit(pytest.main([__file__, "-v"]))
