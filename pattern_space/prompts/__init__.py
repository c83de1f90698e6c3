"""Prompt 模板工具。

- transcript: 将历史对话折叠为文本记录。
- compiler: 按请求模式拼装发给生成后端的完整 prompt。

模板中的固定示例文本按语言(locale) 存放在 prompts/<locale>/ 目录。
"""

from pathlib import Path


PROMPTS_DIR = Path(__file__).resolve().parent


def load_prompt_text(name: str, locale: str = "en") -> str:
    """读取 prompts/<locale>/<name>.md，去掉末尾换行。"""

    fname = PROMPTS_DIR / locale / f"{name}.md"
    return fname.read_text(encoding="utf-8").rstrip("\n")
