# citeparse - Pandoc 引用解析工具
"""
citeparse 核心包

主要功能：
- scan: 扫描文本中的引用片段组
- fold: 把片段组归并为引用记录
- render_crossref: 渲染 crossref 引用（图、表、公式、章节）
- extract_citations_from_markdown: 从 Markdown 提取全部引用
- extract_citations_from_url: 从 Markdown 文件或 URL 提取全部引用
"""

__version__ = "0.1.0"

from .models import (
    SegmentType,
    Segment,
    Citation,
    CitationGroup,
    RenderedCitation,
    ParserConfig,
    DEFAULT_CONFIG,
)

from .parser import (
    SegmentScanner,
    scan,
    scan_all,
    CitationAggregator,
    fold,
    get_segment_data,
    CrossrefRenderer,
    render_crossref,
    render_literature_notes,
    find_rendered,
)

from .pipeline import (
    extract_citations_from_markdown,
    extract_citations_from_url,
    PipelineResult,
)

__all__ = [
    # 数据模型
    'SegmentType',
    'Segment',
    'Citation',
    'CitationGroup',
    'RenderedCitation',
    'ParserConfig',
    'DEFAULT_CONFIG',
    # 片段扫描
    'SegmentScanner',
    'scan',
    'scan_all',
    # 引用归并
    'CitationAggregator',
    'fold',
    'get_segment_data',
    # 渲染
    'CrossrefRenderer',
    'render_crossref',
    'render_literature_notes',
    'find_rendered',
    # 流水线
    'extract_citations_from_markdown',
    'extract_citations_from_url',
    'PipelineResult',
]
