# -*- coding: utf-8 -*-
"""
测试：引用归并

扫描 -> 归并 的端到端样例
"""
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from citeparse import Segment, SegmentType, CitationAggregator, fold, get_segment_data, scan_all


def _fold_text(text, locale=None):
    groups = scan_all(text)
    assert len(groups) == 1, f"{text!r} 期望1个片段组，实际{len(groups)}"
    return fold(groups[0], locale=locale)


def test_fold_examples():
    """测试常见引用形式的归并结果"""
    print("=" * 70)
    print("引用归并测试")
    print("=" * 70)

    test_cases = [
        # (文本, 期望的 CSL 字典)
        # 只有第 0 个片段是 @ 的裸引用才是 composite，方括号组不是
        ("[@doe2020]", [{"id": "doe2020"}]),
        ("[@doe2020, p. 12]", [{"id": "doe2020", "locator": "12", "label": "page"}]),
        ("[-@doe2020]", [{"id": "doe2020", "suppress-author": True}]),
        ("@doe2020", [{"id": "doe2020", "composite": True}]),
        ("[see @a; @b]", [{"id": "a", "prefix": "see"}, {"id": "b"}]),
        ("[@a; see @b, chap. 3]", [
            {"id": "a"},
            {"id": "b", "prefix": "see", "locator": "3", "label": "chapter"},
        ]),
        ("[@doe{ii, A}, more]", [{"id": "doe", "suffix": ", more", "locator": "ii, A"}]),
        ("[[notes/lit|@doe2020]]", [{"id": "doe2020", "litNote": "notes/lit", "composite": True}]),
        ("[@fig:plot1]", [{"id": "plot1", "citeType": "fig"}]),
        ("@doe [p. 4]", [{"id": "doe", "locator": "4", "label": "page", "composite": True}]),
    ]

    for text, expected in test_cases:
        group = _fold_text(text)
        actual = [c.to_dict() for c in group.citations]
        print(f"\n📝 {text}")
        print(f"   {actual}")
        assert actual == expected, f"{text!r} 归并结果不符"
    print("\n   ✅ 通过")


def test_author_only_then_suppressed():
    """裸引用后接 -@：先输出仅作者引用，再输出隐藏作者引用"""
    group = _fold_text("@doe [-@doe2020]")
    assert [c.to_dict() for c in group.citations] == [
        {"id": "doe", "author-only": True},
        {"id": "doe2020", "suppress-author": True},
    ]


def test_separator_resets_key():
    """分号之后没有新键时不产生重复引用"""
    for text in ["[@a;]", "[@a; foo]"]:
        group = _fold_text(text)
        print(f"\n📝 {text} -> {group.keys}")
        assert group.keys == ["a"], f"{text!r} 不应重复输出上一条引用"

    group = _fold_text("[@a; @b;]")
    assert group.keys == ["a", "b"]


def test_flags_mutually_exclusive():
    """三个标志最多只有一个为 True"""
    for text in ["@doe [-@doe2020]", "[[a|@x]]", "[-@y]", "@z [p. 1]"]:
        group = _fold_text(text)
        for cite in group.citations:
            flags = [cite.composite, cite.suppress_author, cite.author_only]
            assert sum(flags) <= 1, f"{text!r} 中的 {cite.id} 同时设置了多个标志"


def test_group_span():
    """引用组位置取首尾片段"""
    text = "As [@doe2020, p. 12] shows"
    group = fold(scan_all(text)[0])
    assert (group.start, group.end) == (3, 20)
    assert group.keys == ["doe2020"]
    assert group.to_dict()["from"] == 3 and group.to_dict()["to"] == 20


def test_unknown_locale_drops_label():
    """查不到语言区域时不设置 label，定位值保留"""
    group = _fold_text("[@doe2020, p. 12]", locale="xx-XX")
    cite = group.citations[0]
    assert cite.label is None, "未知语言区域不应设置 label"
    assert cite.locator == "12"

    aggregator = CitationAggregator(locale="en-US")
    assert aggregator.fold(scan_all("[@doe2020, p. 12]")[0]).citations[0].label == "page"


def test_fold_rejects_empty_group():
    """空片段组抛出 ValueError"""
    with pytest.raises(ValueError):
        fold([])


def test_fold_segments_without_scanner():
    """直接构造的片段组同样可以归并"""
    segments = [
        Segment(SegmentType.BRACKET, 0, 1, "["),
        Segment(SegmentType.AT, 1, 2, "@"),
        Segment(SegmentType.KEY, 2, 5, "doe"),
        Segment(SegmentType.SUFFIX, 5, 11, ", more"),
        Segment(SegmentType.BRACKET, 11, 12, "]"),
    ]
    group = fold(segments)
    assert group.citations[0].suffix == ", more"
    assert group.citations[0].composite is False


def test_get_segment_data():
    """测试原始字段提取"""
    data = get_segment_data(scan_all("[@doe, p. 12]")[0])
    print(f"\n📝 {data}")
    assert data["key"] == "doe"
    assert data["locator"] == "12"
    assert data["locator_label"] == "p."
    assert data["suffix"] == "", "出现定位值时清空后缀"
    assert data["prefix"] is None

    data = get_segment_data(scan_all("[[notes/lit|@fig:x]]")[0])
    assert data["lit_note"] == "notes/lit"
    assert data["cite_type"] == "fig"
    assert data["key"] == "x"


if __name__ == "__main__":
    test_fold_examples()
    test_author_only_then_suppressed()
    test_separator_resets_key()
    test_flags_mutually_exclusive()
    test_group_span()
    test_unknown_locale_drops_label()
    test_fold_segments_without_scanner()
    test_get_segment_data()

    print("\n" + "=" * 70)
    print("测试完成！")
    print("=" * 70)
