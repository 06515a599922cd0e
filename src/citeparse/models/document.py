# -*- coding: utf-8 -*-
"""
文档数据模型
"""
from dataclasses import dataclass


@dataclass
class MarkdownBlock:
    """
    Markdown 文本块（段落或标题行）

    Attributes:
        text: 块文本（行内代码已被占位符遮盖，长度与原文一致）
        start_pos: 在原文中的起始位置
        end_pos: 在原文中的结束位置
        line: 起始行号（从 1 开始）
        title: 所在章节标题（文档开头没有标题时为空）
    """
    text: str
    start_pos: int = 0
    end_pos: int = 0
    line: int = 1
    title: str = ""

    def __repr__(self) -> str:
        return f"MarkdownBlock(line={self.line}, title='{self.title[:30]}', text='{self.text[:30]}...')"
