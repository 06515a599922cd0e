# -*- coding: utf-8 -*-
"""
定位信息前瞻解析

引用键结束后，尝试把后续文本解释为 CSL 定位信息，例如：
- ", p. 12"      -> locatorSuffix(", ") + locatorLabel("p.") + locatorSuffix(" ") + locator("12")
- " pp. 3-4, f"  -> ... + locator("3-4") + suffix(", f")
- "{chap. iv}"   -> locatorLabel("chap.") + locatorSuffix(" ") + locator("iv")
"""
from typing import List, Optional, Tuple

from ..locators import LOCATOR_VALUE_RE
from ..models.config import ParserConfig, DEFAULT_CONFIG
from ..models.segment import Segment, SegmentType


def _split_label(segment: Segment, config: ParserConfig) -> Tuple[List[Segment], int, str]:
    """
    切分标签部分

    Returns:
        (标签相关片段, 剩余文本的起始位置, 剩余文本)；没有标签时片段列表为空
    """
    match = config.label_pattern.match(segment.val)
    if not match:
        return [], segment.start, segment.val

    segments: List[Segment] = []
    index = segment.start
    leading, label, trailing = match.group(1), match.group(2), match.group(3)

    if leading:
        segments.append(Segment(SegmentType.LOCATOR_SUFFIX, index, index + len(leading), leading))
        index += len(leading)

    segments.append(Segment(SegmentType.LOCATOR_LABEL, index, index + len(label), label))
    index += len(label)

    if trailing:
        segments.append(Segment(SegmentType.LOCATOR_SUFFIX, index, index + len(trailing), trailing))
        index += len(trailing)

    return segments, index, segment.val[match.end():]


def parse_possible_locator(
    segment: Segment,
    config: ParserConfig = DEFAULT_CONFIG,
) -> List[Segment]:
    """
    解析键后面（非花括号）的后缀文本

    必须先有定位标签，再有定位值；定位值之后的文本成为普通 suffix。

    Args:
        segment: 类型为 suffix 的片段
        config: 解析配置

    Returns:
        拆分后的片段列表；无法识别为定位信息时返回空列表，由调用方保留原片段
    """
    segments, index, rest = _split_label(segment, config)
    if not segments:
        return []

    loc_match = LOCATOR_VALUE_RE.match(rest)
    if not loc_match:
        return []

    locator = loc_match.group(1)
    segments.append(Segment(SegmentType.LOCATOR, index, index + len(locator), locator))
    index += len(locator)

    suffix = rest[loc_match.end():]
    if suffix:
        segments.append(Segment(SegmentType.SUFFIX, index, index + len(suffix), suffix))

    return segments


def parse_explicit_locator(
    segment: Segment,
    config: ParserConfig = DEFAULT_CONFIG,
) -> Optional[List[Segment]]:
    """
    解析花括号中的显式定位信息，如 {p. 12} 或 {ii, A, D-Z}

    标签之后的全部文本都是定位值。

    Args:
        segment: 类型为 locatorSuffix 的片段（花括号内的文本）
        config: 解析配置

    Returns:
        - None: 没有定位标签，调用方应把整个片段视为 locator
        - []: 有标签但没有定位值
        - 拆分后的片段列表
    """
    segments, index, rest = _split_label(segment, config)
    if not segments:
        return None
    if not rest:
        return []

    segments.append(Segment(SegmentType.LOCATOR, index, index + len(rest), rest))
    return segments
