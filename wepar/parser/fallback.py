"""Synthesized content returned when extraction is impossible."""

from __future__ import annotations

from html import escape

from .article_outcome import ArticleOutcome, OutcomeStats
from .images import collect_images

CHALLENGE_TITLE = "示例文章标题（验证受限）"
ERROR_TITLE = "解析失败 - 示例内容"


def _link(url: str) -> str:
    """Render ``url`` as a visible link opening in a new tab."""

    safe = escape(url, quote=True)
    return f'<a href="{safe}" target="_blank">{safe}</a>'


def _outcome(title: str, content: str, failure: str) -> ArticleOutcome:
    """Wrap fallback markup into an outcome with matching stats."""

    content = content.strip()
    images = collect_images(content)
    return ArticleOutcome(
        title=title,
        content=content,
        images=images,
        stats=OutcomeStats(
            image_count=len(images), content_length=len(content)
        ),
        failure=failure,
    )


def challenge_fallback(url: str) -> ArticleOutcome:
    """Return demo content explaining that verification blocked access.

    Args:
        url: Original article URL, shown as a link.

    Returns:
        Outcome classified as ``challenge``.
    """

    content = f"""
<div style="text-align: center; padding: 40px; color: #666;">
  <h2>⚠️ 访问受限</h2>
  <p>当前微信公众号文章需要完成人机验证，无法自动获取内容。</p>
  <p>这是一个演示内容，您可以手动复制文章内容到编辑器中进行编辑。</p>
  <br>
  <h3>演示功能：</h3>
  <ul style="text-align: left; max-width: 400px; margin: 0 auto;">
    <li>富文本编辑器</li>
    <li>实时预览功能</li>
    <li>多种HTML模板</li>
    <li>图片上传和管理</li>
    <li>一键导出HTML</li>
  </ul>
  <p style="margin-top: 20px; font-size: 14px; color: #999;">
    原文链接：{_link(url)}
  </p>
</div>
"""
    return _outcome(CHALLENGE_TITLE, content, "challenge")


def error_fallback(
    url: str, message: str, failure: str = "unexpected"
) -> ArticleOutcome:
    """Return diagnostic content describing why parsing failed.

    Args:
        url: Original article URL, shown as a link.
        message: Text of the captured failure.
        failure: Failure classification stored on the outcome.

    Returns:
        Outcome carrying the escaped message, the link and usage hints.
    """

    content = f"""
<div style="border: 2px dashed #ccc; padding: 30px; margin: 20px 0; \
border-radius: 8px; background: #fafafa;">
  <h2 style="color: #e74c3c; margin-bottom: 15px;">🚫 内容获取失败</h2>
  <p><strong>错误信息：</strong>{escape(message)}</p>
  <p><strong>原文链接：</strong>{_link(url)}</p>
  <hr style="margin: 20px 0; border: none; border-top: 1px solid #ddd;">
  <h3>💡 使用建议：</h3>
  <ol>
    <li>请检查链接是否正确且可访问</li>
    <li>部分公众号文章需要关注后才能查看</li>
    <li>您可以手动复制文章内容到编辑器</li>
    <li>尝试使用其他公众号文章链接测试</li>
  </ol>
  <h3>🎯 功能演示：</h3>
  <p>即使无法获取真实内容，您仍然可以体验我们强大的编辑功能：</p>
  <ul>
    <li><strong>富文本编辑：</strong>支持标题、段落、列表等格式</li>
    <li><strong>图片管理：</strong>上传本地图片或使用网络链接</li>
    <li><strong>实时预览：</strong>随时查看编辑效果</li>
    <li><strong>多种模板：</strong>基础、博客、邮件、微信模板</li>
    <li><strong>一键导出：</strong>生成完整的HTML文件</li>
  </ul>
  <p style="margin-top: 20px; font-style: italic; color: #666;">
    您可以在编辑器中修改这段内容，体验所有功能特性！
  </p>
</div>
"""
    return _outcome(ERROR_TITLE, content, failure)
