# -*- coding: utf-8 -*-
"""
数据模型模块
"""
from .segment import (
    SegmentType,
    Segment,
)

from .citation import (
    Citation,
    CitationGroup,
    RenderedCitation,
)

from .document import (
    MarkdownBlock,
)

from .config import (
    ParserConfig,
    DEFAULT_CONFIG,
)

__all__ = [
    # segment models
    'SegmentType',
    'Segment',
    # citation models
    'Citation',
    'CitationGroup',
    'RenderedCitation',
    # config
    'ParserConfig',
    'DEFAULT_CONFIG',
    # document models
    'MarkdownBlock',
]
