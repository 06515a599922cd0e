# -*- coding: utf-8 -*-
"""
Pandoc 引用片段扫描器

单遍逐字符扫描 Markdown 文本，把其中的 Pandoc 引用语法切分为带类型、带位置的片段组。

支持的引用形式：
1. 方括号组：[@doe2020], [see @doe2020, p. 12; @roe, chap. 3]
2. 隐藏作者：[-@doe2020]
3. 裸引用：@doe2020，以及带方括号后缀的 @doe2020 [p. 4]
4. 显式键与显式定位：@{doe 2020}, [@doe{ii, A}, more]
5. crossref 引用：[@fig:plot1], @eq:energy
6. 文献笔记链接：[[notes/lit|@doe2020]]

输出：每个引用出现对应一个 List[Segment]，按原文顺序惰性产出。
同一组内片段按位置排序且互不重叠，拼接各片段 val 即为该组覆盖的原文。
"""
import logging
import unicodedata
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from ..models.config import ParserConfig, DEFAULT_CONFIG
from ..models.segment import Segment, SegmentType
from .locator import parse_possible_locator, parse_explicit_locator

logger = logging.getLogger(__name__)


# 键内部允许出现的标点
KEY_PUNCT = frozenset(":.#$%&-+?<>~_/")
# 行内空白
SPACE = frozenset(" \t\v")
# @ 之前允许出现的字符（| 用于文献笔记链接）
PRE_KEY = frozenset(" \t\v[-\r\n;|")
# 裸引用之后允许紧跟的标点
POST_KEY_PUNCT = frozenset(".?,;):")


def _is_terminus(c: Optional[str]) -> bool:
    return c is None or c == "\r" or c == "\n"


def _is_valid_pre_key(c: Optional[str]) -> bool:
    return c is None or c in PRE_KEY


def _is_space(c: Optional[str]) -> bool:
    return c is not None and c in SPACE


def _is_alnum(c: str) -> bool:
    return c.isalpha() or c.isnumeric()


def _is_punct(c: str) -> bool:
    return unicodedata.category(c).startswith("P")


@dataclass
class ScanState:
    """
    单个候选引用的扫描状态

    Attributes:
        bracket_depth: 方括号嵌套深度
        in_brackets: 是否位于 [...] 中
        in_key: 是否正在读取引用键
        in_explicit_key: 是否为 {...} 形式的显式键
        in_explicit_locator: 花括号内是否为显式定位
        in_link: 是否以 [[ 打开（内部链接）
        seeking_locator: 键结束后是否尝试解析定位信息
        seeking_suffix: 裸引用后是否在等待方括号后缀
        cancel_seek: 方括号后缀中出现新键时，是否放弃与前面裸引用的合并
        encountered_key: 是否已读到 @
        segments: 已提交的片段
        current: 正在累积、尚未提交的片段（提交时才确定最终类型）
    """
    bracket_depth: int = 0
    in_brackets: bool = False
    in_key: bool = False
    in_explicit_key: bool = False
    in_explicit_locator: bool = False
    in_link: bool = False
    seeking_locator: bool = False
    seeking_suffix: bool = False
    cancel_seek: bool = False
    encountered_key: bool = False
    segments: List[Segment] = field(default_factory=list)
    current: Optional[Segment] = None


class SegmentScanner:
    """
    引用片段扫描器

    每个实例只扫描一次；迭代实例即得到片段组。
    扫描器同时最多持有两个状态：当前状态 state，以及等待方括号后缀的裸引用 pending。
    """

    def __init__(
        self,
        text: str,
        ignore_links: bool = False,
        config: Optional[ParserConfig] = None,
    ):
        """
        Args:
            text: 待扫描文本
            ignore_links: 为 True 时忽略 [[内部链接]] 与 [文本](链接) 中的引用
            config: 解析配置
        """
        self.text = text
        self.ignore_links = ignore_links
        self.config = config or DEFAULT_CONFIG
        self.state: Optional[ScanState] = None
        self.pending: Optional[ScanState] = None
        self._ready: List[List[Segment]] = []

    def __iter__(self) -> Iterator[List[Segment]]:
        text = self.text
        length = len(text)
        # 多走一步（c 为 None）以收尾
        for i in range(length + 1):
            prev = text[i - 1] if i > 0 else None
            c = text[i] if i < length else None
            nxt = text[i + 1] if i + 1 < length else None
            self._step(i, prev, c, nxt)
            if self._ready:
                ready, self._ready = self._ready, []
                yield from ready

    # ================== 状态转移 ==================

    def _step(self, i: int, prev: Optional[str], c: Optional[str], nxt: Optional[str]):
        state = self.state

        if c == "[":
            if nxt == "[" and state is None:
                return
            if state is not None:
                state.bracket_depth += 1
            if state is None or state.bracket_depth == 1:
                if state is not None and state.seeking_suffix:
                    self.pending = state
                self.state = ScanState(
                    bracket_depth=1,
                    in_brackets=True,
                    in_link=prev == "[",
                    cancel_seek=self.pending is not None,
                    current=Segment(SegmentType.BRACKET, i, i + 1, c),
                )
                return

        if c == "@" and _is_valid_pre_key(prev):
            self._open_key(i, c)
            return

        if state is not None and state.seeking_suffix and not _is_space(c):
            self._end_group()
            return

        if state is not None and state.in_key:
            self._step_key(i, prev, c, nxt)
            return

        if state is not None and state.in_brackets:
            self._step_brackets(i, prev, c, nxt)
            return

        if state is not None and not state.seeking_suffix:
            self.state = None

    def _open_key(self, i: int, c: str):
        """处理 @：方括号内开始新的键，方括号外开始新的裸引用"""
        state = self.state
        if self.pending is not None and state is not None and state.cancel_seek:
            self._cancel_seek()

        if state is not None and state.in_brackets:
            self._end_current(i)
        else:
            if state is not None and state.seeking_suffix:
                self._end_group()
            state = self.state = ScanState()

        state.current = Segment(SegmentType.AT, i, i + 1, c)
        state.in_key = True
        state.in_explicit_key = False
        state.encountered_key = True

    def _step_key(self, i: int, prev: Optional[str], c: Optional[str], nxt: Optional[str]):
        """读取引用键"""
        state = self.state

        if _is_terminus(c):
            if not state.in_brackets:
                self._end_current(i)
                self._end_group()
            else:
                self._discard()
            return

        # 键从 @ 之后开始；crossref 引用的键从类型分隔符 : 之后开始
        if state.current.type in (SegmentType.AT, SegmentType.TYPE_SEPARATOR):
            if _is_alnum(c) or c == "_":
                self._end_current(i)
                state.current = Segment(SegmentType.KEY, i, i + 1, c)
                return
            if c == "{":
                self._end_current(i)
                state.current = Segment(SegmentType.CURLY_BRACKET, i, i + 1, c)
                state.in_explicit_key = True
                return
            self._discard()
            return

        if state.in_explicit_key and c != "}":
            if state.current.type is not SegmentType.KEY:
                self._end_current(i)
                state.current = Segment(SegmentType.KEY, i, i + 1, c)
                return
            state.current.val += c
            return

        if c == "}":
            self._end_current(i)
            state.in_key = False
            state.in_explicit_key = False
            state.seeking_locator = True
            if not state.in_brackets:
                state.segments.append(Segment(SegmentType.CURLY_BRACKET, i, i + 1, c))
                state.current = None
                state.seeking_suffix = True
            else:
                state.current = Segment(SegmentType.CURLY_BRACKET, i, i + 1, c)
            return

        if c == "{":
            self._end_current(i)
            state.current = Segment(SegmentType.CURLY_BRACKET, i, i + 1, c)
            state.in_key = False
            state.seeking_locator = True
            state.in_explicit_locator = True
            return

        if _is_alnum(c):
            state.current.val += c
            return

        if _is_space(c):
            self._end_current(i)
            state.in_key = False
            state.seeking_locator = True
            if not state.in_brackets:
                state.current = None
                state.seeking_suffix = True
            else:
                state.current = Segment(SegmentType.SUFFIX, i, i + 1, c)
            return

        if c in KEY_PUNCT:
            self._step_key_punct(i, c, nxt)
            return

        if not state.in_brackets:
            if _is_punct(c):
                self._end_current(i)
                self._end_group()
            self.state = None
            return

        # 方括号内的其他字符交给方括号处理
        self._step_brackets(i, prev, c, nxt)

    def _step_key_punct(self, i: int, c: str, nxt: Optional[str]):
        """键内部出现标点"""
        state = self.state

        if _is_terminus(nxt):
            if not state.in_brackets:
                self._end_current(i)
                self._end_group()
            else:
                self._discard()
            return

        # fig: / tbl: / eq: / sec: 之前的文本改为 crossref 类型
        if (
            c == ":"
            and state.current.type is SegmentType.KEY
            and state.current.val in self.config.cite_types
        ):
            state.current.type = SegmentType.CITE_TYPE
            self._end_current(i)
            state.current = Segment(SegmentType.TYPE_SEPARATOR, i, i + 1, c)
            return

        # 连续标点
        if nxt in KEY_PUNCT:
            self._end_current(i)
            state.in_key = False
            if not state.in_brackets:
                self._end_group()
            else:
                state.current = Segment(SegmentType.SUFFIX, i, i + 1, c)
                state.seeking_locator = True
            return

        if _is_space(nxt):
            if not state.in_brackets and c in POST_KEY_PUNCT:
                self._end_current(i)
                self._end_group()
            elif not state.in_brackets:
                self._discard()
            else:
                self._end_current(i)
                state.in_key = False
                state.current = Segment(SegmentType.SUFFIX, i, i + 1, c)
                state.seeking_locator = True
            return

        state.current.val += c

    def _step_brackets(self, i: int, prev: Optional[str], c: Optional[str], nxt: Optional[str]):
        """方括号内、键之外的字符"""
        state = self.state

        if _is_terminus(c):
            self._discard()
            return

        if c == "]":
            state.bracket_depth -= 1
            if state.bracket_depth == 0:
                if self.ignore_links and (state.in_link or nxt == "("):
                    logger.debug(f"忽略链接中的引用，结束位置 {i}")
                    self._discard()
                    return
                self._end_current(i)
                state.segments.append(Segment(SegmentType.BRACKET, i, i + 1, c))
                if self.pending is None:
                    self._end_group()
                else:
                    self._merge_pending()
                return

        if c == ";":
            # ; 之后的文本是下一条引用的前缀
            state.cancel_seek = False
            state.in_key = False
            self._end_current(i)
            state.current = Segment(SegmentType.SEPARATOR, i, i + 1, c)
            return

        if c == "-" and nxt == "@":
            state.cancel_seek = False
            self._end_current(i)
            state.current = Segment(SegmentType.SUPPRESSOR, i, i + 1, c)
            return

        # @ 前的 | 表示之前的文本是文献笔记路径
        if c == "|" and nxt == "@":
            state.cancel_seek = False
            state.current.type = SegmentType.LIT_NOTE
            self._end_current(i)
            state.current = Segment(SegmentType.LINK_SEPARATOR, i, i + 1, c)
            return

        if c == "{":
            self._end_current(i)
            state.current = Segment(SegmentType.CURLY_BRACKET, i, i + 1, c)
            if self.pending is not None and self.pending.seeking_locator:
                state.in_explicit_locator = True
            return

        if c == "}":
            if state.in_explicit_locator and state.current.type is SegmentType.SUFFIX:
                state.current.type = SegmentType.LOCATOR_SUFFIX
                state.seeking_locator = False
            self._end_current(i)
            state.current = Segment(SegmentType.CURLY_BRACKET, i, i + 1, c)
            return

        if prev == "{":
            self._end_current(i)
            if state.seeking_locator and state.encountered_key:
                segment_type = SegmentType.LOCATOR_SUFFIX
            else:
                segment_type = SegmentType.SUFFIX
            state.current = Segment(segment_type, i, i + 1, c)
            return

        if prev == "}":
            self._end_current(i)
            state.current = Segment(SegmentType.SUFFIX, i, i + 1, c)
            return

        if self.pending is not None:
            if prev == ";":
                self._end_current(i)
                state.current = Segment(SegmentType.PREFIX, i, i + 1, c)
                return
            if prev == "[" and state.bracket_depth == 1:
                self._end_current(i)
                state.current = Segment(SegmentType.SUFFIX, i, i + 1, c)
                return
        elif prev == "[" or prev == ";":
            self._end_current(i)
            state.current = Segment(SegmentType.PREFIX, i, i + 1, c)
            return

        if state.in_key:
            self._end_current(i)
            state.current = Segment(SegmentType.SUFFIX, i, i + 1, c)
            state.in_key = False
            state.seeking_locator = True
            return

        state.current.val += c

    # ================== 片段提交 ==================

    def _end_current(self, i: int):
        """提交当前片段；处于定位前瞻时尝试拆分为定位片段"""
        state = self.state
        current = state.current
        current.end = i
        current.val = self.text[current.start:i]

        pending_seeking = self.pending is not None and self.pending.seeking_locator
        if state.seeking_locator or pending_seeking:
            if current.type is SegmentType.SUFFIX:
                parsed = parse_possible_locator(current, self.config)
                if parsed:
                    state.segments.extend(parsed)
                    state.seeking_locator = False
                    return
            elif current.type is SegmentType.LOCATOR_SUFFIX:
                parsed = parse_explicit_locator(current, self.config)
                if parsed is None:
                    current.type = SegmentType.LOCATOR
                elif parsed:
                    state.segments.extend(parsed)
                    state.seeking_locator = False
                    return

        state.segments.append(current)

    def _emit(self, segments: List[Segment]):
        # 零宽片段不离开扫描器
        segments = [s for s in segments if s.end > s.start]
        if not any(s.type is SegmentType.KEY for s in segments):
            logger.debug(f"丢弃没有引用键的片段组: {segments}")
            return
        self._ready.append(segments)

    def _end_group(self):
        """结束当前状态并输出片段组"""
        self._emit(self.state.segments)
        self.state = None

    def _discard(self):
        """放弃当前状态；等待后缀的裸引用单独输出"""
        self.state = None
        if self.pending is not None:
            self._emit(self.pending.segments)
            self.pending = None

    def _cancel_seek(self):
        """方括号中出现了自己的键：裸引用单独输出，方括号成为独立的引用组"""
        state = self.state
        current = state.current
        if current is not None and current.type is SegmentType.SUFFIX and len(state.segments) == 1:
            current.type = SegmentType.PREFIX
        self._emit(self.pending.segments)
        self.pending = None

    def _merge_pending(self):
        """把方括号后缀并入前面的裸引用"""
        pending, state = self.pending, self.state
        segments = list(pending.segments)
        gap_start = segments[-1].end if segments else state.segments[0].start
        gap_end = state.segments[0].start
        if gap_end > gap_start:
            segments.append(Segment(SegmentType.SUFFIX, gap_start, gap_end, self.text[gap_start:gap_end]))
        segments.extend(state.segments)
        self._emit(segments)
        self.pending = None
        self.state = None


def scan(
    text: str,
    ignore_links: bool = False,
    config: Optional[ParserConfig] = None,
) -> Iterator[List[Segment]]:
    """
    惰性扫描文本中的引用片段组

    Args:
        text: Markdown 文本
        ignore_links: 是否忽略 [[内部链接]] 与 [文本](链接) 中的引用
        config: 解析配置

    Returns:
        片段组迭代器，每组对应一次引用出现

    Example:
        >>> [[s.val for s in g] for g in scan("As [@doe2020, p. 12] shows")]
        [['[', '@', 'doe2020', ', ', 'p.', ' ', '12', ']']]
    """
    return iter(SegmentScanner(text, ignore_links=ignore_links, config=config))


def scan_all(
    text: str,
    ignore_links: bool = False,
    config: Optional[ParserConfig] = None,
) -> List[List[Segment]]:
    """扫描全部片段组并返回列表"""
    return list(scan(text, ignore_links=ignore_links, config=config))
