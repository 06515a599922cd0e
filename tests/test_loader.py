# -*- coding: utf-8 -*-
"""
测试：Markdown 读取与分块
"""
import sys
from pathlib import Path

import pytest
import requests

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from citeparse.loader import MarkdownLoader, load_markdown, split_markdown_blocks


SAMPLE = "# Title\n\nSee [@doe].\n\n```\n@code\n```\n\nEnd @roe\n"


def test_split_blocks():
    """测试段落、标题与围栏代码块"""
    print("=" * 70)
    print("Markdown 分块测试")
    print("=" * 70)

    blocks = split_markdown_blocks(SAMPLE)
    for b in blocks:
        print(f"   {b}")

    assert [b.text for b in blocks] == ["# Title", "See [@doe].", "End @roe"], "围栏代码块应被跳过"
    assert [b.line for b in blocks] == [1, 3, 9]
    assert all(b.title == "Title" for b in blocks)
    for b in blocks:
        assert SAMPLE[b.start_pos:b.end_pos] == b.text, "块位置应指向原文"
    print("   ✅ 通过")


def test_unclosed_fence():
    """未闭合的围栏代码块之后不再分块"""
    blocks = split_markdown_blocks("Before @a\n\n~~~\n@b\n")
    assert [b.text for b in blocks] == ["Before @a"]


def test_mask_inline_code():
    """行内代码被等长占位符替换"""
    loader = MarkdownLoader()
    text = "Use `@doe` and @roe"
    masked = loader.mask_inline_code(text)
    assert len(masked) == len(text)
    assert "@doe" not in masked
    assert masked.endswith("and @roe")


def test_read_local_file(tmp_path):
    """读取本地文件；文件不存在时抛出 FileNotFoundError"""
    path = tmp_path / "paper.md"
    path.write_text("See @doe.", encoding="utf-8")
    assert load_markdown(str(path)) == "See @doe."

    with pytest.raises(FileNotFoundError):
        load_markdown(str(tmp_path / "missing.md"))


class _FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.encoding = None
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")


def test_fetch(monkeypatch):
    """测试 URL 下载"""
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _FakeResponse("See [@doe].")

    monkeypatch.setattr(requests, "get", fake_get)

    assert MarkdownLoader.is_url("https://example.com/paper.md")
    assert not MarkdownLoader.is_url("paper.md")
    assert load_markdown("https://example.com/paper.md", timeout=5) == "See [@doe]."
    assert calls == [("https://example.com/paper.md", 5)]


def test_fetch_errors(monkeypatch):
    """下载失败与无效 URL 抛出 ValueError"""
    monkeypatch.setattr(requests, "get", lambda url, timeout: _FakeResponse("", status=404))
    with pytest.raises(ValueError):
        MarkdownLoader.fetch("https://example.com/missing.md")

    with pytest.raises(ValueError):
        MarkdownLoader.fetch("ftp://example.com/paper.md")


if __name__ == "__main__":
    test_split_blocks()
    test_unclosed_fence()
    test_mask_inline_code()

    print("\n" + "=" * 70)
    print("测试完成！")
    print("=" * 70)
