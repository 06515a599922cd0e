# -*- coding: utf-8 -*-
"""
测试：crossref 渲染与文献笔记引用
"""
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from citeparse import (
    ParserConfig,
    CrossrefRenderer,
    fold,
    render_crossref,
    render_literature_notes,
    find_rendered,
    scan_all,
)
from citeparse.parser import only_keys


def _groups(text):
    return [fold(segments) for segments in scan_all(text)]


def test_crossref_render():
    """测试 crossref 引用的单复数标签"""
    print("=" * 70)
    print("crossref 渲染测试")
    print("=" * 70)

    text = "See [@fig:plot1], [@fig:a; @fig:b], [@doe2020] and @tbl:results."
    rendered = render_crossref(_groups(text))
    for r in rendered:
        print(f"   {r.val}  ({r.start}-{r.end})")

    assert [r.val for r in rendered] == [
        "[Figure plot1]",
        "[Figures a, b]",
        "[Table results]",
    ], "普通引用不参与 crossref 渲染"
    assert text[rendered[0].start:rendered[0].end] == "[@fig:plot1]"
    print("   ✅ 通过")


def test_crossref_uses_first_citation_type():
    """以第一条引用的类型决定标签"""
    rendered = render_crossref(_groups("[@eq:e1; @doe]"))
    assert [r.val for r in rendered] == ["[Equations e1, doe]"]

    assert render_crossref(_groups("[@doe; @eq:e1]")) == []


def test_crossref_custom_labels():
    """自定义 crossref 标签"""
    config = ParserConfig(crossref_labels={"fig": ("Abb.", "Abb.")})
    renderer = CrossrefRenderer(config)
    groups = [fold(segments, config=config) for segments in scan_all("[@fig:x]", config=config)]
    assert renderer.render(groups)[0].val == "[Abb. x]"
    # 只配置了 fig，eq: 不再是类型前缀
    assert scan_all("[@eq:e1]", config=config)[0][2].val == "eq:e1"


def test_literature_notes():
    """测试文献笔记引用与 note_index"""
    print("=" * 70)
    print("文献笔记引用测试")
    print("=" * 70)

    text = "[[a|@x]] then [@y] then [[b|@x]]"
    notes = render_literature_notes(_groups(text))
    for n in notes:
        print(f"   {n.note_index}: {n.note} {n.val!r}")

    assert [(n.note_index, n.note) for n in notes] == [(0, "a"), (1, "b")]
    assert all(n.val == text[n.start:n.end] for n in notes), "val 为引用组覆盖的原文"
    assert notes[0].to_dict()["noteIndex"] == 0
    print("   ✅ 通过")


def test_find_rendered():
    """同键引用按 note_index 依次匹配"""
    text = "[[a|@x]] [[b|@x]] [[c|@y]]"
    cache = render_literature_notes(_groups(text))
    wanted = scan_all("[[z|@x]]")[0]
    assert only_keys(wanted) == [("key", "x")]

    match, remaining = find_rendered(cache, wanted)
    assert match.note == "a"
    assert [r.note for r in remaining] == ["b", "c"]

    match, remaining = find_rendered(remaining, wanted)
    assert match.note == "b"
    assert [r.note for r in remaining] == ["c"]

    match, remaining = find_rendered(remaining, wanted)
    assert match is None, "已消耗的引用不再匹配"
    assert [r.note for r in remaining] == ["c"]


if __name__ == "__main__":
    test_crossref_render()
    test_crossref_uses_first_citation_type()
    test_crossref_custom_labels()
    test_literature_notes()
    test_find_rendered()

    print("\n" + "=" * 70)
    print("测试完成！")
    print("=" * 70)
