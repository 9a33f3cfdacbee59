"""md2slack/lib/convert.py — Markdown → Slack 変換パイプライン"""
from __future__ import annotations

from lib.inline import rewrite_inline
from lib.table import convert_tables_in_text


def convert(text: str) -> str:
    """Markdown テキストを Slack 形式に変換する。

    インライン変換（見出し・強調・コードブロック・リスト・リンク・引用）の後に
    テーブル変換を行う。どんな入力でも例外は出さず、解釈できない部分はそのまま残す。
    """
    text = rewrite_inline(text)
    return convert_tables_in_text(text)
