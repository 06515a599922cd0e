# -*- coding: utf-8 -*-
"""
定位标签与 crossref 类型数据表

- LOCATOR_TERMS: 语言区域 -> 定位标签 -> CSL 定位术语
- CROSSREF_LABELS: crossref 类型 -> (单数标签, 复数标签)
- LOCATOR_VALUE_RE: 定位值语法（页码、范围、罗马数字等）
"""
import re
from typing import Dict, Iterable, Pattern, Tuple


def _expand(term: str, *labels: str) -> Dict[str, str]:
    return {label: term for label in labels}


LOCATOR_TERMS: Dict[str, Dict[str, str]] = {
    "en-US": {
        **_expand("appendix", "app.", "apps.", "appendix", "appendices"),
        **_expand("book", "bk.", "bks.", "book", "books"),
        **_expand("chapter", "chap.", "chaps.", "chapter", "chapters"),
        **_expand("column", "col.", "cols.", "column", "columns"),
        **_expand("equation", "eq.", "eqs.", "equation", "equations"),
        **_expand("figure", "fig.", "figs.", "figure", "figures"),
        **_expand("folio", "fol.", "fols.", "folio", "folios"),
        **_expand("number", "no.", "nos.", "number", "numbers"),
        **_expand("line", "l.", "ll.", "line", "lines"),
        **_expand("note", "n.", "nn.", "note", "notes"),
        **_expand("opus", "op.", "opp.", "opus", "opera"),
        **_expand("page", "p.", "pp.", "page", "pages"),
        **_expand("paragraph", "para.", "paras.", "¶", "¶¶", "paragraph", "paragraphs"),
        **_expand("part", "pt.", "pts.", "part", "parts"),
        **_expand("section", "sec.", "secs.", "§", "§§", "section", "sections"),
        **_expand("sub-verbo", "s.v.", "s.vv.", "sub verbo", "sub verbis"),
        **_expand("table", "tbl.", "tbls.", "table", "tables"),
        **_expand("verse", "v.", "vv.", "verse", "verses"),
        **_expand("volume", "vol.", "vols.", "volume", "volumes"),
    },
}

CROSSREF_LABELS: Dict[str, Tuple[str, str]] = {
    "fig": ("Figure", "Figures"),
    "eq": ("Equation", "Equations"),
    "tbl": ("Table", "Tables"),
    "sec": ("Section", "Sections"),
}

# 单个定位值：范围（3-4、[a]:b）、含数字的字母数字串、罗马数字
_LOCATOR_ITEM = (
    r"(?:[\[(]?[a-z\d]+[\])]?[-—:][\[(]?[a-z\d]+[\])]?"
    r"|[a-z\d()\[\]]*\d+[a-z\d()\[\]]*"
    r"|[mdclxvi]+)"
)

LOCATOR_VALUE_RE = re.compile(
    rf"^({_LOCATOR_ITEM}(?:[ \t]*,[ \t]*{_LOCATOR_ITEM})*)",
    re.IGNORECASE,
)


def build_label_pattern(labels: Iterable[str]) -> Pattern:
    """
    构建定位标签正则

    分组：1 = 标签前的逗号与空白，2 = 标签，3 = 标签后的空白。
    长标签优先匹配；以字母结尾的标签后面不能紧跟字母（避免 "part" 匹配 "partly"）。

    Args:
        labels: 所有可识别的标签

    Returns:
        编译后的正则
    """
    alternatives = []
    for label in sorted(set(labels), key=len, reverse=True):
        escaped = re.escape(label)
        if label[-1].isalpha():
            escaped += r"(?![^\W\d_])"
        alternatives.append(escaped)
    if not alternatives:
        # 没有任何标签时返回永不匹配的正则
        return re.compile(r"(?!)")
    return re.compile(r"^([,\s]*)(" + "|".join(alternatives) + r")(\s*)")
