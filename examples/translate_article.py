#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""Article translation sample script.

Shows the basic use of content-translator on a blog article with a title,
a summary and Markdown content. Change the settings below to try other
backends and options.

Usage:
    cd examples
    python translate_article.py

Environment variables (read from .env automatically):
    DEEPL_API_KEY: Required for DeepL
    OPENAI_API_KEY: Required for OpenAI
    OPENAI_MODEL: OpenAI model (default: gpt-4o-mini)
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add the project to the path (development use)
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

# Load .env file from project root (API keys, models, etc.)
load_dotenv(PROJECT_ROOT / ".env")


# =============================================================================
# Settings - change these to customise the run
# =============================================================================

# Backend: "google-free" | "deepl" | "libretranslate" | "openai" | "claude" | ...
# - libretranslate: no API key needed on most instances
# - google-free: no API key (free, rate limited)
# - deepl: DEEPL_API_KEY environment variable
# - openai: OPENAI_API_KEY environment variable
TRANSLATOR = "google-free"

SOURCE_LANG = "zh"
TARGET_LANG = "en"

# Line numbers (1-based, within CONTENT) whose code comments are translated
SELECTIVE_LINES: set[int] = {7}

TITLE = "用 Python 写一个简单的 HTTP 服务"
SUMMARY = "十分钟内搭建一个可以返回 JSON 的服务。"
CONTENT = """\
首先安装依赖，详细说明见 https://docs.python.org/3/library/http.server.html 。

运行 `python server.py` 后访问 <strong>8000</strong> 端口。

```python
from http.server import HTTPServer, BaseHTTPRequestHandler
# 处理 GET 请求
class Handler(BaseHTTPRequestHandler):
    pass
```

配置文件位于 /etc/myapp/config.yaml ，有问题请联系 admin@example.com 。
"""

OUTPUT_DIR = Path(__file__).parent / "outputs"

# =============================================================================
# Main (usually no changes needed)
# =============================================================================


def print_progress(stage: str, current: int, total: int, message: str = "") -> None:
    print(f"  [{stage}] {current}/{total} {message}".rstrip())


async def main() -> None:
    from content_translator.config import TranslationConfig
    from content_translator.pipeline import ArticleFields, TranslationService
    from content_translator.translators import TranslatorError

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    output_path = OUTPUT_DIR / f"article_{TRANSLATOR}_{TARGET_LANG}.md"

    print("=" * 60)
    print("Article Translation Example")
    print("=" * 60)
    print(f"Translator:  {TRANSLATOR}")
    print(f"Languages:   {SOURCE_LANG} -> {TARGET_LANG}")
    print(f"Comments:    lines {sorted(SELECTIVE_LINES)}")
    print(f"Output:      {output_path}")
    print("=" * 60)

    try:
        config = TranslationConfig.from_env(provider=TRANSLATOR)
        service = TranslationService.from_config(config, progress_callback=print_progress)
    except TranslatorError as e:
        print(f"Error: {e.user_message}")
        sys.exit(1)

    print("\nTranslating article...")
    async with service:
        article = await service.translate_article(
            ArticleFields(title=TITLE, summary=SUMMARY, content=CONTENT),
            SOURCE_LANG,
            TARGET_LANG,
            selective_lines=SELECTIVE_LINES,
        )

    output_path.write_text(
        f"# {article.title}\n\n> {article.summary}\n\n{article.content}",
        encoding="utf-8",
    )

    print("\n" + "=" * 60)
    print("Translation Complete!")
    print("=" * 60)
    print(f"Title:   {article.title}")
    print(f"Summary: {article.summary}")
    print(f"Output:  {output_path}")


if __name__ == "__main__":
    asyncio.run(main())
