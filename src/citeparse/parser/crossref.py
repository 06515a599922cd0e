# -*- coding: utf-8 -*-
"""
crossref 引用渲染

把 pandoc-crossref 风格的引用组（@fig:a、[@tbl:b; @tbl:c]）渲染为展示文本：
- [@fig:plot1]           -> "[Figure plot1]"
- [@fig:a; @fig:b]       -> "[Figures a, b]"
"""
from typing import List, Optional, Sequence

from ..models.citation import CitationGroup, RenderedCitation
from ..models.config import ParserConfig, DEFAULT_CONFIG


class CrossrefRenderer:
    """
    crossref 引用渲染器

    只处理第一条引用带 crossref 类型的引用组，输出顺序与输入一致，不去重。
    """

    CITE_OPEN = "["
    CITE_CLOSE = "]"
    CITE_JOIN = ", "

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def label_for(self, group: CitationGroup) -> Optional[str]:
        """返回引用组的类型标签（单数或复数），非 crossref 引用组返回 None"""
        if not group.citations:
            return None
        labels = self.config.crossref_labels.get(group.citations[0].cite_type or "")
        if labels is None:
            return None
        singular, plural = labels
        return plural if len(group.citations) > 1 else singular

    def render_group(self, group: CitationGroup) -> Optional[RenderedCitation]:
        label = self.label_for(group)
        if label is None:
            return None
        ids = self.CITE_JOIN.join(c.id for c in group.citations)
        val = f"{self.CITE_OPEN}{label} {ids}{self.CITE_CLOSE}"
        return RenderedCitation.from_group(group, val)

    def render(self, groups: Sequence[CitationGroup]) -> List[RenderedCitation]:
        """
        渲染 crossref 引用组

        Args:
            groups: 归并后的引用组

        Returns:
            RenderedCitation 列表
        """
        rendered = []
        for group in groups:
            cite = self.render_group(group)
            if cite is not None:
                rendered.append(cite)
        return rendered


def render_crossref(
    groups: Sequence[CitationGroup],
    config: Optional[ParserConfig] = None,
) -> List[RenderedCitation]:
    """便捷函数：渲染 crossref 引用组"""
    return CrossrefRenderer(config).render(groups)
