# -*- coding: utf-8 -*-
"""
citeparse Web API

基于 Flask 的 JSON 接口
"""
import os
import sys
import logging
from flask import Flask, request, jsonify

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
# 设置 citeparse 模块的日志级别
logging.getLogger('citeparse').setLevel(logging.INFO)

# 添加项目路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from citeparse import Segment, fold, extract_citations_from_markdown

logging.getLogger('werkzeug').setLevel(logging.ERROR)

logger = logging.getLogger('citeparse.web')

app = Flask(__name__)


def _bad_request(message: str):
    return jsonify({'success': False, 'error': message}), 400


@app.route('/api/health')
def health():
    """健康检查"""
    return jsonify({'success': True})


@app.route('/api/scan', methods=['POST'])
def scan_text():
    """
    提取引用 API

    请求参数：
    - text: Markdown 文本
    - locale: 定位标签语言区域（可选，默认 en-US）
    - ignore_links: 是否忽略链接中的引用（可选，默认 false）
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _bad_request('请求体必须是 JSON 对象')

    text = data.get('text')
    if not isinstance(text, str):
        return _bad_request('请提供 text 字段')

    result = extract_citations_from_markdown(
        text,
        locale=data.get('locale') or None,
        ignore_links=bool(data.get('ignore_links', False)),
    )
    if not result.success:
        return _bad_request(result.error)

    logger.info("[Scan] 文本 %d 字符，引用组 %d 个", len(text), len(result.groups))
    return jsonify({
        'success': True,
        'groups': [g.to_dict() for g in result.groups],
        'rendered': [r.to_dict() for r in result.rendered],
        'keys': result.keys,
    })


@app.route('/api/fold', methods=['POST'])
def fold_segments():
    """
    归并片段组 API

    请求参数：
    - segments: 片段列表 [{type, from, to, val}, ...]
    - locale: 定位标签语言区域（可选）
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _bad_request('请求体必须是 JSON 对象')

    raw_segments = data.get('segments')
    if not isinstance(raw_segments, list) or not raw_segments:
        return _bad_request('请提供非空的 segments 列表')

    try:
        segments = [Segment.from_dict(s) for s in raw_segments]
        group = fold(segments, locale=data.get('locale') or None)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f'片段格式错误: {e}')

    return jsonify({'success': True, 'group': group.to_dict()})


if __name__ == '__main__':
    print("=" * 60)
    print("citeparse Web API")
    print("=" * 60)
    print("访问地址: http://localhost:5000")
    print("=" * 60)

    app.run(host='0.0.0.0', port=5000, debug=True, threaded=True)
