# -*- coding: utf-8 -*-
"""
引用数据模型
"""
from dataclasses import dataclass
from typing import Optional, List, Dict, Any

from .segment import Segment


@dataclass
class Citation:
    """
    引用组中的一条引用

    composite / suppress_author / author_only 三者互斥，最多只有一个为 True。

    Attributes:
        id: 引用键
        prefix: 前缀文本
        suffix: 后缀文本
        infix: 中缀文本
        locator: 定位值，如 "12"、"3-4"
        label: 定位标签对应的术语，如 "page"
        lit_note: 文献笔记路径（[[note|@key]] 中的 note）
        cite_type: crossref 类型（fig/tbl/eq/sec）
        suppress_author: 隐藏作者（-@key）
        author_only: 仅作者
        composite: 无方括号的裸引用
    """
    id: str
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

    def to_dict(self) -> Dict[str, Any]:
        """转换为 CSL-JSON 风格的字典，未设置的字段不输出"""
        result: Dict[str, Any] = {"id": self.id}
        optional = (
            ("prefix", self.prefix),
            ("suffix", self.suffix),
            ("infix", self.infix),
            ("locator", self.locator),
            ("label", self.label),
            ("litNote", self.lit_note),
            ("citeType", self.cite_type),
        )
        for name, value in optional:
            if value:
                result[name] = value
        if self.composite:
            result["composite"] = True
        elif self.suppress_author:
            result["suppress-author"] = True
        elif self.author_only:
            result["author-only"] = True
        return result


@dataclass
class CitationGroup:
    """
    一次引用出现（方括号组或裸引用）

    Attributes:
        data: 完整片段序列
        citations: 由片段归并得到的引用列表
        start: 第一个片段的起始位置
        end: 最后一个片段的结束位置
    """
    data: List[Segment]
    citations: List[Citation]
    start: int
    end: int

    @property
    def keys(self) -> List[str]:
        return [c.id for c in self.citations]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [s.to_dict() for s in self.data],
            "citations": [c.to_dict() for c in self.citations],
            "from": self.start,
            "to": self.end,
        }


@dataclass
class RenderedCitation(CitationGroup):
    """
    可直接展示的引用

    Attributes:
        val: 展示文本
        note_index: 文献笔记序号，用于区分不同笔记中的同键引用
        note: 文献笔记路径
    """
    val: str = ""
    note_index: Optional[int] = None
    note: Optional[str] = None

    @classmethod
    def from_group(cls, group: CitationGroup, val: str, **kwargs) -> "RenderedCitation":
        return cls(
            data=group.data,
            citations=group.citations,
            start=group.start,
            end=group.end,
            val=val,
            **kwargs,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["val"] = self.val
        if self.note is not None:
            result["note"] = self.note
            result["noteIndex"] = self.note_index
        return result
