# -*- coding: utf-8 -*-
"""
引用提取流水线

一站式完成：Markdown（文本 / 文件 / URL） -> 分块 -> 扫描片段 -> 归并引用 -> crossref 与文献笔记渲染
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .loader import MarkdownLoader
from .models import CitationGroup, RenderedCitation, ParserConfig, Segment, DEFAULT_CONFIG
from .parser import scan, CitationAggregator, CrossrefRenderer, render_literature_notes

# 配置日志
logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """
    流水线处理结果

    Attributes:
        success: 是否成功
        groups: 引用组（位置为文档中的位置）
        rendered: crossref 渲染结果，其后为文献笔记引用
        keys: 按首次出现顺序去重后的引用键
        blocks_scanned: 扫描的文本块数量
        error: 错误信息（如果失败）
    """
    success: bool = False
    groups: List[CitationGroup] = field(default_factory=list)
    rendered: List[RenderedCitation] = field(default_factory=list)
    keys: List[str] = field(default_factory=list)
    blocks_scanned: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "groups": [g.to_dict() for g in self.groups],
            "rendered": [r.to_dict() for r in self.rendered],
            "keys": self.keys,
            "blocks_scanned": self.blocks_scanned,
            "error": self.error,
        }

    def __repr__(self) -> str:
        if self.success:
            return f"PipelineResult(success=True, groups_count={len(self.groups)}, keys_count={len(self.keys)})"
        return f"PipelineResult(success=False, error='{self.error}')"


def _unique_keys(groups: List[CitationGroup]) -> List[str]:
    seen = set()
    keys = []
    for group in groups:
        for key in group.keys:
            if key not in seen:
                seen.add(key)
                keys.append(key)
    return keys


def extract_citations_from_markdown(
    markdown_content: str,
    locale: Optional[str] = None,
    ignore_links: bool = False,
    config: Optional[ParserConfig] = None,
) -> PipelineResult:
    """
    从 Markdown 内容提取引用

    Args:
        markdown_content: Markdown 内容
        locale: 定位标签语言区域（默认使用配置中的 "en-US"）
        ignore_links: 是否忽略 [[内部链接]] 与 [文本](链接) 中的引用
        config: 解析配置

    Returns:
        PipelineResult 对象

    Example:
        >>> result = extract_citations_from_markdown("See [@doe2020, p. 12].")
        >>> result.groups[0].citations[0].locator
        '12'
    """
    result = PipelineResult()
    config = config or DEFAULT_CONFIG
    start_time = time.time()

    try:
        blocks = MarkdownLoader().split_blocks(markdown_content)
        aggregator = CitationAggregator(locale=locale, config=config)

        for block in blocks:
            for segments in scan(block.text, ignore_links=ignore_links, config=config):
                shifted = [
                    Segment(
                        type=s.type,
                        start=s.start + block.start_pos,
                        end=s.end + block.start_pos,
                        val=markdown_content[s.start + block.start_pos:s.end + block.start_pos],
                    )
                    for s in segments
                ]
                result.groups.append(aggregator.fold(shifted))

        result.blocks_scanned = len(blocks)
        result.rendered = (
            CrossrefRenderer(config).render(result.groups)
            + render_literature_notes(result.groups)
        )
        result.keys = _unique_keys(result.groups)
        result.success = True

        logger.info(
            f"[Pipeline] 提取引用结束，耗时 {time.time() - start_time:.3f}s，"
            f"文本块 {result.blocks_scanned} 个，引用组 {len(result.groups)} 个，引用键 {len(result.keys)} 个"
        )

    except ValueError as e:
        result.error = f"参数错误: {e}"
    except Exception as e:
        logger.exception("[Pipeline] 提取引用失败")
        result.error = f"处理失败: {e}"

    return result


def extract_citations_from_url(
    url: str,
    locale: Optional[str] = None,
    ignore_links: bool = False,
    config: Optional[ParserConfig] = None,
    download_timeout: int = 60,
) -> PipelineResult:
    """
    从 Markdown 文件的 URL 或本地路径提取引用

    完整流水线：URL/路径 -> 读取 Markdown -> 提取引用

    Args:
        url: Markdown 文件的 URL 或本地路径
        locale: 定位标签语言区域
        ignore_links: 是否忽略链接中的引用
        config: 解析配置
        download_timeout: 下载超时时间（秒）

    Returns:
        PipelineResult 对象
    """
    try:
        logger.info(f"[Pipeline] 读取 Markdown: {url}")
        markdown_content = MarkdownLoader().read(url, timeout=download_timeout)
    except ImportError as e:
        return PipelineResult(error=f"缺少依赖: {e}")
    except (ValueError, OSError) as e:
        return PipelineResult(error=f"读取失败: {e}")

    return extract_citations_from_markdown(
        markdown_content,
        locale=locale,
        ignore_links=ignore_links,
        config=config,
    )
