# -*- coding: utf-8 -*-
"""
命令行入口

用法：
    citeparse paper.md
    citeparse https://example.com/paper.md --ignore-links --locale en-US
    citeparse paper.md --terms extra_terms.json --crossref
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .models import ParserConfig, DEFAULT_CONFIG
from .pipeline import extract_citations_from_url

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="citeparse",
        description="提取 Markdown 中的 Pandoc 引用",
    )
    parser.add_argument("source", help="Markdown 文件路径或 URL")
    parser.add_argument("--locale", default=None, help="定位标签语言区域（默认 en-US）")
    parser.add_argument(
        "--ignore-links",
        action="store_true",
        help="忽略 [[内部链接]] 与 [文本](链接) 中的引用",
    )
    parser.add_argument(
        "--terms",
        default=None,
        help="额外的定位标签表（JSON：语言区域 -> 标签 -> 术语）",
    )
    parser.add_argument(
        "--crossref",
        action="store_true",
        help="只输出 crossref 与文献笔记的渲染结果",
    )
    parser.add_argument("--timeout", type=int, default=60, help="下载超时时间（秒）")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    return parser


def load_config(terms_path: Optional[str]) -> ParserConfig:
    """
    读取额外的定位标签表并生成配置

    Raises:
        ValueError: 文件内容不是合法的标签表
    """
    if not terms_path:
        return DEFAULT_CONFIG
    try:
        extra = json.loads(Path(terms_path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"标签表不是合法的 JSON: {terms_path}\n错误: {e}")
    if not isinstance(extra, dict):
        raise ValueError(f"标签表必须是 JSON 对象: {terms_path}")
    return DEFAULT_CONFIG.with_terms(extra)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )

    try:
        config = load_config(args.terms)
    except (ValueError, OSError) as e:
        logger.error(f"配置错误: {e}")
        return 1

    result = extract_citations_from_url(
        args.source,
        locale=args.locale,
        ignore_links=args.ignore_links,
        config=config,
        download_timeout=args.timeout,
    )

    if not result.success:
        logger.error(result.error)
        return 1

    if args.crossref:
        output = [r.to_dict() for r in result.rendered]
    else:
        output = result.to_dict()
    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
