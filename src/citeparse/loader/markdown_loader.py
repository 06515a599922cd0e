# -*- coding: utf-8 -*-
"""
Markdown 读取与分块

功能：
1. 读取本地 Markdown 文件或通过 URL 下载
2. 按空行与标题切分文本块，跳过围栏代码块
3. 遮盖行内代码，保证代码中的 @ 不被识别为引用（位置不变）
"""
import logging
import re
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import urlparse

from ..models.document import MarkdownBlock

logger = logging.getLogger(__name__)


class MarkdownLoader:
    """Markdown 读取器"""

    HEADING_PATTERN = re.compile(r'^(#{1,6})\s+(.+?)\s*#*\s*$')
    FENCE_PATTERN = re.compile(r'^\s{0,3}(`{3,}|~{3,})')
    INLINE_CODE_PATTERN = re.compile(r'(`+)(?!`).+?(?<!`)\1(?!`)', re.DOTALL)

    # 行内代码的占位符：既不是空白也不是标点，不会改变引用的识别边界
    MASK_CHAR = '\x1f'

    @staticmethod
    def is_url(path: str) -> bool:
        """
        判断是否是 URL

        Args:
            path: 路径字符串

        Returns:
            是否是 URL
        """
        try:
            result = urlparse(path)
            return result.scheme in ('http', 'https')
        except ValueError:
            return False

    @staticmethod
    def fetch(url: str, timeout: int = 60) -> str:
        """
        从 URL 下载 Markdown 文本

        Args:
            url: Markdown 文件的 URL
            timeout: 下载超时时间（秒）

        Returns:
            文本内容

        Raises:
            ImportError: requests 未安装
            ValueError: URL 无效或下载失败
        """
        try:
            import requests
        except ImportError:
            raise ImportError(
                "requests 未安装。请运行: pip install requests"
            )

        parsed = urlparse(url)
        if parsed.scheme not in ('http', 'https'):
            raise ValueError(f"无效的 URL: {url}")

        try:
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ValueError(f"下载 Markdown 失败: {url}\n错误: {e}")

        if not response.encoding:
            response.encoding = 'utf-8'
        logger.info(f"[Loader] 已下载 {url}，{len(response.text)} 字符")
        return response.text

    def read(self, source: Union[str, Path], timeout: int = 60) -> str:
        """
        读取 Markdown：URL 或本地路径

        Raises:
            FileNotFoundError: 本地文件不存在
            ValueError: 下载失败
        """
        if isinstance(source, str) and self.is_url(source):
            return self.fetch(source, timeout=timeout)

        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Markdown 文件不存在: {path}")
        return path.read_text(encoding='utf-8')

    def mask_inline_code(self, text: str) -> str:
        """用占位符替换行内代码（含反引号），长度不变"""
        return self.INLINE_CODE_PATTERN.sub(
            lambda m: self.MASK_CHAR * len(m.group(0)),
            text,
        )

    def split_blocks(self, markdown: str) -> List[MarkdownBlock]:
        """
        切分文本块

        - 连续的非空行组成一个段落块
        - 标题行单独成块，并更新之后各块的 title
        - 围栏代码块整体跳过

        Args:
            markdown: Markdown 文本

        Returns:
            文本块列表（位置为原文中的位置）
        """
        blocks: List[MarkdownBlock] = []
        title = ""
        fence: Optional[str] = None

        pos = 0
        block_start = None
        block_line = 0

        def flush(end: int):
            nonlocal block_start
            if block_start is not None:
                text = markdown[block_start:end].rstrip('\r\n')
                if text.strip():
                    blocks.append(MarkdownBlock(
                        text=self.mask_inline_code(text),
                        start_pos=block_start,
                        end_pos=block_start + len(text),
                        line=block_line,
                        title=title,
                    ))
            block_start = None

        for line_no, line in enumerate(markdown.splitlines(keepends=True), start=1):
            stripped = line.strip()
            fence_match = self.FENCE_PATTERN.match(line)

            if fence is not None:
                if fence_match and fence_match.group(1)[0] == fence[0] and len(fence_match.group(1)) >= len(fence):
                    fence = None
            elif fence_match:
                flush(pos)
                fence = fence_match.group(1)
            elif not stripped:
                flush(pos)
            else:
                heading_match = self.HEADING_PATTERN.match(stripped)
                if heading_match:
                    flush(pos)
                    title = heading_match.group(2).strip()
                    block_start, block_line = pos, line_no
                    flush(pos + len(line))
                elif block_start is None:
                    block_start, block_line = pos, line_no

            pos += len(line)

        if fence is None:
            flush(pos)
        else:
            logger.warning("[Loader] 围栏代码块未闭合，其后的内容不做引用识别")

        return blocks


def load_markdown(source: Union[str, Path], timeout: int = 60) -> str:
    """
    便捷函数：读取 Markdown（URL 或本地路径）
    """
    return MarkdownLoader().read(source, timeout=timeout)


def split_markdown_blocks(markdown: str) -> List[MarkdownBlock]:
    """
    便捷函数：切分 Markdown 文本块
    """
    return MarkdownLoader().split_blocks(markdown)
