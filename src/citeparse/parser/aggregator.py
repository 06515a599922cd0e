# -*- coding: utf-8 -*-
"""
引用归并器

把一个片段组折叠为引用记录（CitationGroup）。

规则：
- 第 0 个片段为 @ 时为裸引用（composite）
- ; 分隔多条引用，遇到分隔符即输出当前引用并清空全部累积字段（包括键）
- 裸引用后的 -@（如 @doe [-@doe2020]）先输出一条仅作者引用，之后的引用隐藏作者
- 定位标签按语言区域查表，查不到时不设置 label
- 只含空白的前缀、后缀、中缀被忽略
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..models.citation import Citation, CitationGroup
from ..models.config import ParserConfig, DEFAULT_CONFIG
from ..models.segment import Segment, SegmentType


@dataclass
class _Accumulator:
    """当前引用的累积字段"""
    key: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    infix: Optional[str] = None
    locator: Optional[str] = None
    label: Optional[str] = None
    lit_note: Optional[str] = None
    cite_type: Optional[str] = None
    suppress_author: bool = False
    author_only: bool = False
    composite: bool = False

    def reset_flags(self):
        self.composite = False
        self.author_only = False
        self.suppress_author = False


def _clean(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = text.strip()
    return text or None


class CitationAggregator:
    """
    引用归并器

    Attributes:
        locale: 定位标签查表使用的语言区域
        config: 解析配置（提供定位标签表）
    """

    def __init__(self, locale: Optional[str] = None, config: Optional[ParserConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.locale = locale or self.config.locale

    def _build(self, acc: _Accumulator) -> Citation:
        cite = Citation(
            id=acc.key,
            prefix=_clean(acc.prefix),
            suffix=_clean(acc.suffix),
            infix=_clean(acc.infix),
            lit_note=_clean(acc.lit_note),
            cite_type=_clean(acc.cite_type),
            locator=acc.locator or None,
        )
        if acc.label:
            cite.label = self.config.lookup_term(acc.label, self.locale)

        # 三个标志互斥
        if acc.composite:
            cite.composite = True
        elif acc.suppress_author:
            cite.suppress_author = True
        elif acc.author_only:
            cite.author_only = True
        return cite

    def fold(self, segments: Sequence[Segment]) -> CitationGroup:
        """
        折叠片段组

        Args:
            segments: 扫描器输出的一个片段组

        Returns:
            CitationGroup

        Raises:
            ValueError: 片段组为空
        """
        if not segments:
            raise ValueError("片段组为空，无法归并引用")

        citations: List[Citation] = []
        acc = _Accumulator()

        def push():
            # ; 之后没有新的键时不输出引用
            if acc.key is None:
                return
            citations.append(self._build(acc))
            acc.reset_flags()

        for index, seg in enumerate(segments):
            seg_type = seg.type
            if seg_type is SegmentType.AT:
                if index == 0:
                    acc.composite = True
            elif seg_type is SegmentType.SUPPRESSOR:
                if acc.composite:
                    acc.suffix = None
                    acc.locator = None
                    acc.label = None
                    acc.composite = False
                    acc.author_only = True
                    push()
                acc.suppress_author = True
            elif seg_type is SegmentType.SEPARATOR:
                push()
                acc = _Accumulator()
            elif seg_type is SegmentType.KEY:
                acc.key = seg.val
            elif seg_type is SegmentType.PREFIX:
                acc.prefix = seg.val
            elif seg_type is SegmentType.SUFFIX:
                acc.suffix = seg.val
            elif seg_type is SegmentType.LOCATOR:
                acc.locator = seg.val
            elif seg_type is SegmentType.LOCATOR_LABEL:
                acc.label = seg.val
            elif seg_type is SegmentType.LIT_NOTE:
                # 文献笔记链接中的引用按裸引用处理
                acc.lit_note = seg.val
                acc.composite = True
            elif seg_type is SegmentType.CITE_TYPE:
                acc.cite_type = seg.val

        push()

        return CitationGroup(
            data=list(segments),
            citations=citations,
            start=segments[0].start,
            end=segments[-1].end,
        )


def fold(
    segments: Sequence[Segment],
    locale: Optional[str] = None,
    config: Optional[ParserConfig] = None,
) -> CitationGroup:
    """
    便捷函数：把一个片段组折叠为 CitationGroup

    Args:
        segments: 片段组
        locale: 语言区域（默认 "en-US"）
        config: 解析配置

    Returns:
        CitationGroup
    """
    return CitationAggregator(locale=locale, config=config).fold(segments)


def get_segment_data(segments: Sequence[Segment]) -> Dict[str, Optional[str]]:
    """
    取片段组中最后出现的键、定位、前后缀等原始值

    出现 locator 时清空之前的 suffix。

    Returns:
        {key, locator, locator_label, prefix, suffix, lit_note, cite_type}
    """
    data: Dict[str, Optional[str]] = {
        "key": None,
        "locator": None,
        "locator_label": None,
        "prefix": None,
        "suffix": None,
        "lit_note": None,
        "cite_type": None,
    }
    fields = {
        SegmentType.KEY: "key",
        SegmentType.LOCATOR_LABEL: "locator_label",
        SegmentType.PREFIX: "prefix",
        SegmentType.SUFFIX: "suffix",
        SegmentType.LIT_NOTE: "lit_note",
        SegmentType.CITE_TYPE: "cite_type",
    }
    for seg in segments:
        if seg.type is SegmentType.LOCATOR:
            data["locator"] = seg.val
            data["suffix"] = ""
        elif seg.type in fields:
            data[fields[seg.type]] = seg.val
    return data
