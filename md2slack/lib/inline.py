"""md2slack/lib/inline.py — Markdown → Slack mrkdwn のインライン・行単位変換"""
from __future__ import annotations

import itertools
import re

# 見出し: "# " / "## " / "### " のみ（"####" は対象外）
_HEADER_RE = re.compile(r"^#{1,3} (.*)$", re.MULTILINE)
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")
# ```lang\n ... ``` （言語タグは空白・バッククォート以外の任意文字列）
_CODE_FENCE_RE = re.compile(r"```[^\s`]*\n(.*?)```", re.DOTALL)
_BULLET_RE = re.compile(r"^- ", re.MULTILINE)
_NESTED_BULLET_RE = re.compile(r"^  - ", re.MULTILINE)
_LINK_RE = re.compile(r"\[([^\]\n]+)\]\(([^)\n]+)\)")
_BLOCKQUOTE_RE = re.compile(r"^> ", re.MULTILINE)

# 強調記号の退避マーカー候補（Unicode 私用領域: BMP → 第15面）
_MARKER_CODES = (range(0xE000, 0xF900), range(0xF0000, 0xFFFFE))


def free_marker(text: str) -> str:
    """text に含まれない退避マーカーを返す。

    私用領域の1文字を優先し、すべて使われている場合は STX・ETX 制御文字で囲んだ
    番号付きトークンにする。例外は出さない。
    """
    for code in itertools.chain.from_iterable(_MARKER_CODES):
        marker = chr(code)
        if marker not in text:
            return marker
    n = 0
    while f"\x02{n}\x03" in text:
        n += 1
    return f"\x02{n}\x03"


def convert_headers(text: str, mark: str = "*") -> str:
    """`# Title` → `*Title*`（見出しレベル 1〜3）"""
    return _HEADER_RE.sub(lambda m: f"{mark}{m.group(1)}{mark}", text)


def convert_bold(text: str, mark: str = "*") -> str:
    """`**text**` → `*text*`"""
    return _BOLD_RE.sub(lambda m: f"{mark}{m.group(1)}{mark}", text)


def convert_italic(text: str) -> str:
    """`*text*` → `_text_`"""
    return _ITALIC_RE.sub(r"_\1_", text)


def convert_emphasis(text: str) -> str:
    """見出し・太字・斜体をまとめて変換する。

    見出しと太字が生成する * は斜体ルールに再マッチしないよう退避マーカーで出力し、
    斜体変換の後で * に戻す。斜体ルールが見るのは元の文書にあった * だけになる。
    """
    mark = free_marker(text)
    text = convert_headers(text, mark)
    text = convert_bold(text, mark)
    text = convert_italic(text)
    return text.replace(mark, "*")


def convert_code_fences(text: str) -> str:
    """コードブロックの言語タグを除去する。"""
    return _CODE_FENCE_RE.sub(lambda m: f"```\n{m.group(1)}```", text)


def convert_lists(text: str) -> str:
    text = _BULLET_RE.sub("• ", text)
    return _NESTED_BULLET_RE.sub("  ◦ ", text)


def convert_links(text: str) -> str:
    """`[text](url)` → `text (url)`"""
    return _LINK_RE.sub(r"\1 (\2)", text)


def convert_blockquotes(text: str) -> str:
    return _BLOCKQUOTE_RE.sub("    ", text)


# 適用順序は固定（見出し → 太字 → 斜体 → コードブロック → リスト → リンク → 引用）
INLINE_RULES = (
    convert_emphasis,
    convert_code_fences,
    convert_lists,
    convert_links,
    convert_blockquotes,
)


def rewrite_inline(text: str) -> str:
    """INLINE_RULES を順に適用する。"""
    for rule in INLINE_RULES:
        text = rule(text)
    return text
