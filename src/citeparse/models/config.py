# -*- coding: utf-8 -*-
"""
解析配置
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Pattern, Tuple, Optional

from ..locators import LOCATOR_TERMS, CROSSREF_LABELS, build_label_pattern


def _freeze_terms(terms: Mapping[str, Mapping[str, str]]) -> Mapping[str, Mapping[str, str]]:
    return MappingProxyType({
        locale: MappingProxyType(dict(table))
        for locale, table in terms.items()
    })


@dataclass(frozen=True)
class ParserConfig:
    """
    扫描器与归并器共用的只读配置

    实例不可变，可在多个线程之间共享。

    Attributes:
        locale: 默认语言区域
        locator_terms: 语言区域 -> 定位标签 -> 定位术语
        crossref_labels: crossref 类型 -> (单数标签, 复数标签)
        label_pattern: 由所有语言区域的标签生成的定位标签正则（自动生成）
    """
    locale: str = "en-US"
    locator_terms: Mapping[str, Mapping[str, str]] = field(
        default_factory=lambda: LOCATOR_TERMS
    )
    crossref_labels: Mapping[str, Tuple[str, str]] = field(
        default_factory=lambda: CROSSREF_LABELS
    )
    label_pattern: Optional[Pattern] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if not self.locale:
            raise ValueError("locale 不能为空")
        for cite_type, labels in self.crossref_labels.items():
            if len(labels) != 2:
                raise ValueError(f"crossref 类型 {cite_type!r} 需要 (单数, 复数) 两个标签")

        object.__setattr__(self, "locator_terms", _freeze_terms(self.locator_terms))
        object.__setattr__(
            self, "crossref_labels",
            MappingProxyType({k: tuple(v) for k, v in self.crossref_labels.items()}),
        )
        labels = [
            label
            for table in self.locator_terms.values()
            for label in table
        ]
        object.__setattr__(self, "label_pattern", build_label_pattern(labels))

    @property
    def cite_types(self) -> Tuple[str, ...]:
        """可识别的 crossref 类型"""
        return tuple(self.crossref_labels)

    def lookup_term(self, label: str, locale: Optional[str] = None) -> Optional[str]:
        """
        查询定位标签对应的术语

        Args:
            label: 定位标签，如 "p."
            locale: 语言区域（默认使用 self.locale）

        Returns:
            术语；语言区域或标签不存在时返回 None
        """
        table = self.locator_terms.get(locale or self.locale)
        if not table:
            return None
        return table.get(label)

    def with_terms(self, extra: Mapping[str, Mapping[str, str]]) -> "ParserConfig":
        """
        合并额外的定位标签表，返回新配置

        同一语言区域的表按标签合并，extra 中的标签覆盖已有标签。
        """
        merged = {locale: dict(table) for locale, table in self.locator_terms.items()}
        for locale, table in extra.items():
            if not isinstance(table, Mapping):
                raise ValueError(f"语言区域 {locale!r} 的标签表必须是字典")
            merged.setdefault(locale, {}).update(
                {str(label): str(term) for label, term in table.items()}
            )
        return ParserConfig(
            locale=self.locale,
            locator_terms=merged,
            crossref_labels=self.crossref_labels,
        )


DEFAULT_CONFIG = ParserConfig()
