# -*- coding: utf-8 -*-
"""
读取器模块

包含 Markdown 下载、读取与分块
"""
from .markdown_loader import (
    MarkdownLoader,
    load_markdown,
    split_markdown_blocks,
)

__all__ = [
    'MarkdownLoader',
    'load_markdown',
    'split_markdown_blocks',
]
