"""Markdown テーブル → 固定幅テーブル変換（tabulate ベース）"""
from __future__ import annotations

import enum
import re

from tabulate import TableFormat, tabulate

DELIMITER = "|"

# セパレータ行: |---|:---:| など（パイプ・ダッシュ・コロン・空白のみ）
_SEPARATOR_RE = re.compile(r"^\|[\s\-|:]+\|$")

CODE_FENCE = "```"


class _ChatRow:
    """tabulate の datarow。元のセルを column_widths() の幅で ljust して組み立てる。

    tabulate 側の幅計算（ANSI 除去・wcwidth）と不足セルの補完は使わない。
    行は tabulate が渡す順に self._rows から取り出す。
    """

    def __init__(self, rows: list[list[str]], widths: list[int]):
        self._rows = iter(rows)
        self._widths = widths

    def __call__(self, padded_cells: list[str], colwidths: list[int], colaligns: list[str]) -> str:
        row = next(self._rows)
        return " | ".join(cell.ljust(w) for cell, w in zip(row, self._widths))


def _chat_table(rows: list[list[str]], widths: list[int]) -> TableFormat:
    return TableFormat(
        lineabove=None,
        linebelowheader=None,
        linebetweenrows=None,
        linebelow=None,
        headerrow=None,
        datarow=_ChatRow(rows, widths),
        padding=0,
        with_header_hide=None,
    )


class ScanState(enum.Enum):
    SCANNING = "scanning"
    COLLECTING = "collecting"


def is_row_like(line: str) -> bool:
    """先頭と末尾が | で、閉じ | が開き | と別にある行か。"""
    line = line.strip()
    return len(line) >= 2 and line.startswith(DELIMITER) and line.endswith(DELIMITER)


def continues_region(lines: list[str], index: int) -> bool:
    """lines[index] が収集中のテーブル領域を延長するか。

    空行は次の行に | がある場合のみ許容する（1行先読みのみ。空行が2行続くと終了）。
    """
    line = lines[index].strip()
    if line:
        return DELIMITER in line
    return index + 1 < len(lines) and DELIMITER in lines[index + 1]


def is_separator(line: str) -> bool:
    return bool(_SEPARATOR_RE.match(line.strip()))


def _parse_row(line: str) -> list[str]:
    """パイプ区切りの1行をセルのリストに分割する。先頭・末尾のフィールドは捨てる。"""
    parts = line.strip().split(DELIMITER)
    if len(parts) < 3:  # |cell| で最低3要素
        return []
    return [c.strip() for c in parts[1:-1]]


def parse_rows(region: list[str]) -> list[list[str]]:
    """テーブル領域の行をパースしてセル行のリストを返す。セパレータ行・空行は除外。"""
    rows: list[list[str]] = []
    for line in region:
        line = line.strip()
        if not line or is_separator(line):
            continue
        cells = _parse_row(line)
        if cells:
            rows.append(cells)
    return rows


def column_widths(rows: list[list[str]]) -> list[int]:
    """列ごとの最大セル長。行に存在しない列はその行では数えない。"""
    widths: list[int] = []
    for row in rows:
        for col, cell in enumerate(row):
            if col == len(widths):
                widths.append(len(cell))
            else:
                widths[col] = max(widths[col], len(cell))
    return widths


def render_rows(rows: list[list[str]]) -> list[str]:
    """セル行を column_widths() の幅に揃え、コードブロックで囲んだ行リストを返す。

    短い行は自分のセルだけを出力する（不足列は空セルで補完しない）。
    """
    widths = column_widths(rows)
    body = tabulate(rows, tablefmt=_chat_table(rows, widths), disable_numparse=True).split("\n")
    separator = "-|-".join("-" * w for w in widths)
    return [CODE_FENCE, body[0], separator, *body[1:], CODE_FENCE]


def format_table(region: list[str]) -> list[str]:
    """テーブル領域を変換する。パースできる行がなければ元の行をそのまま返す。"""
    rows = parse_rows(region)
    if not rows:
        return list(region)
    return render_rows(rows)


def _close_region(lines: list[str], start: int, end: int, out: list[str]) -> int:
    """lines[start:end] を確定し、次に走査する行番号を返す。"""
    region = lines[start:end]
    if sum(1 for line in region if line.strip()) < 2:
        # テーブルではない: 開始行だけ出力して次の行から再走査
        out.append(lines[start])
        return start + 1
    out.extend(format_table(region))
    return end


def convert_tables_in_text(text: str) -> str:
    """テキスト中の Markdown テーブルを固定幅テーブル（コードブロック）に変換する。

    テーブル以外の行はそのまま残す。
    """
    lines = text.split("\n")
    out: list[str] = []
    state = ScanState.SCANNING
    start = cursor = 0

    while cursor < len(lines) or state is ScanState.COLLECTING:
        if state is ScanState.SCANNING:
            if is_row_like(lines[cursor]):
                state, start = ScanState.COLLECTING, cursor
            else:
                out.append(lines[cursor])
            cursor += 1
        elif cursor < len(lines) and continues_region(lines, cursor):
            cursor += 1
        else:
            cursor = _close_region(lines, start, cursor, out)
            state = ScanState.SCANNING

    return "\n".join(out)
