# -*- coding: utf-8 -*-
"""
引用片段数据模型

扫描器输出的最小单元：带类型、带位置的文本片段。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any


class SegmentType(Enum):
    """片段类型"""
    AT = "at"                          # @ 符号
    KEY = "key"                        # 引用键
    CURLY_BRACKET = "curlyBracket"     # { 或 }

    # 方括号内
    SUPPRESSOR = "suppressor"          # -@ 中的 -，隐藏作者
    BRACKET = "bracket"                # [ 或 ]
    PREFIX = "prefix"
    SUFFIX = "suffix"
    LOCATOR_SUFFIX = "locatorSuffix"   # 定位标签前后的空白与标点
    LOCATOR = "locator"
    LOCATOR_LABEL = "locatorLabel"
    SEPARATOR = "separator"            # 引用组内的 ;

    # 内部链接中的引用 [[note|@key]]
    LIT_NOTE = "litNote"
    LINK_SEPARATOR = "linkSeparator"

    # pandoc-crossref 引用 @fig:id
    CITE_TYPE = "citeType"
    TYPE_SEPARATOR = "typeSeparator"


@dataclass
class Segment:
    """
    文本片段

    Attributes:
        type: 片段类型
        start: 在原文中的起始位置（含）
        end: 在原文中的结束位置（不含）
        val: 原文 text[start:end]
    """
    type: SegmentType
    start: int
    end: int
    val: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "from": self.start,
            "to": self.end,
            "val": self.val,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Segment":
        """从 to_dict() 的输出还原片段，type 非法时抛出 ValueError"""
        return cls(
            type=SegmentType(data["type"]),
            start=int(data["from"]),
            end=int(data["to"]),
            val=str(data["val"]),
        )

    def __repr__(self) -> str:
        return f"Segment({self.type.value}, {self.start}-{self.end}, {self.val!r})"
