# -*- coding: utf-8 -*-
"""
文献笔记引用

[[notes/lit|@doe2020]] 形式的引用指向某篇文献笔记。同一引用键可能出现在多篇笔记里，
用 note_index 区分：按笔记序号排序，每次匹配后消耗掉已使用的序号。
"""
from typing import List, Optional, Sequence, Tuple

from ..models.citation import CitationGroup, RenderedCitation
from ..models.segment import Segment, SegmentType


def render_literature_notes(groups: Sequence[CitationGroup]) -> List[RenderedCitation]:
    """
    为文献笔记引用组生成 RenderedCitation

    Args:
        groups: 归并后的引用组

    Returns:
        第一条引用带 lit_note 的引用组，note_index 为其在文献笔记引用中的序号（从 0 开始），
        val 为引用组覆盖的原文
    """
    rendered = []
    for group in groups:
        if not group.citations or not group.citations[0].lit_note:
            continue
        rendered.append(RenderedCitation.from_group(
            group,
            "".join(seg.val for seg in group.data),
            note_index=len(rendered),
            note=group.citations[0].lit_note,
        ))
    return rendered


def only_keys(segments: Sequence[Segment]) -> List[Tuple[str, str]]:
    """片段组中所有引用键的 (类型, 值)"""
    return [
        (seg.type.value, seg.val)
        for seg in segments
        if seg.type is SegmentType.KEY
    ]


def find_rendered(
    cache: Sequence[RenderedCitation],
    segments: Sequence[Segment],
) -> Tuple[Optional[RenderedCitation], List[RenderedCitation]]:
    """
    在已渲染的引用中查找与片段组引用键相同的一条

    Args:
        cache: 已渲染的引用
        segments: 新扫描得到的片段组

    Returns:
        (匹配到的引用或 None, 剩余引用)。匹配成功时剩余引用中去掉了相同 note_index 的条目，
        没有 note_index 的条目总是保留
    """
    ordered = sorted(
        cache,
        key=lambda c: (c.note_index is None, c.note_index if c.note_index is not None else 0),
    )
    wanted = only_keys(segments)
    match = next((c for c in ordered if only_keys(c.data) == wanted), None)
    if match is None or match.note_index is None:
        return match, ordered

    remaining = [
        c for c in ordered
        if c.note_index is None or c.note_index != match.note_index
    ]
    return match, remaining
