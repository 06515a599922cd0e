# -*- coding: utf-8 -*-
"""
解析器模块

扫描 -> 归并 -> crossref 渲染
"""
from .segmenter import (
    SegmentScanner,
    ScanState,
    scan,
    scan_all,
)
from .locator import (
    parse_possible_locator,
    parse_explicit_locator,
)
from .aggregator import (
    CitationAggregator,
    fold,
    get_segment_data,
)
from .crossref import (
    CrossrefRenderer,
    render_crossref,
)
from .notes import (
    render_literature_notes,
    only_keys,
    find_rendered,
)

__all__ = [
    # 片段扫描
    'SegmentScanner',
    'ScanState',
    'scan',
    'scan_all',
    # 定位前瞻
    'parse_possible_locator',
    'parse_explicit_locator',
    # 引用归并
    'CitationAggregator',
    'fold',
    'get_segment_data',
    # crossref 渲染
    'CrossrefRenderer',
    'render_crossref',
    # 文献笔记
    'render_literature_notes',
    'only_keys',
    'find_rendered',
]
