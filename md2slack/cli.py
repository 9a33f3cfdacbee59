#!/usr/bin/env python3
"""md2slack: Markdown を Slack 形式のテキストに変換する"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))
from lib.config import load_config
from lib.convert import convert

PROG = "md2slack"
DEBUG = os.environ.get("MD2SLACK_DEBUG") == "1"
_DEBUG_FILE = "/tmp/md2slack-debug.txt"

EXAMPLES = f"""\
Examples:
  {PROG} file.md
  echo "**bold text**" | {PROG}
  {PROG} < input.md > output.txt
"""


def _dbg(msg: str) -> None:
    if DEBUG:
        with open(_DEBUG_FILE, "a") as f:
            f.write(f"[{PROG}] {msg}\n")


def _error(msg: str) -> None:
    print(f"[{PROG}] {msg}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Convert Markdown to Slack formatting",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", nargs="?", help="Markdown file to convert (default: stdin)")
    parser.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    return parser


def join_lines(raw: str) -> str:
    """行単位で読んだ場合と同じ文字列にする（末尾改行1つを除去、CRLF → LF）。"""
    lines = raw.split("\n")
    if lines[-1] == "":
        lines.pop()
    return "\n".join(line[:-1] if line.endswith("\r") else line for line in lines)


def read_input(path: str | None, encoding: str) -> str:
    """ファイル引数 > パイプ入力の順で入力を読む。読めない場合は exit(1)。"""
    if path:
        try:
            with open(path, encoding=encoding, newline="") as f:
                raw = f.read()
        except FileNotFoundError as e:
            _error(f"Error: File '{path}' not found: {e}")
            sys.exit(1)
        except (OSError, UnicodeDecodeError) as e:
            _error(f"Error reading input: {e}")
            sys.exit(1)
        _dbg(f"input: file {path!r} ({len(raw)} chars)")
        return join_lines(raw)

    if sys.stdin.isatty():
        _error("Error: No input provided. Use a file argument or pipe input.")
        print(f"Try: {PROG} --help", file=sys.stderr)
        sys.exit(1)

    try:
        raw = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        _error(f"Error reading input: {e}")
        sys.exit(1)
    _dbg(f"input: stdin ({len(raw)} chars)")
    return join_lines(raw)


def write_output(text: str, path: str | None, encoding: str) -> None:
    """stdout または -o で指定されたファイルに書き出す。失敗時は exit(1)。"""
    if not path:
        sys.stdout.write(text)
        _dbg("output: stdout")
        return

    try:
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(text)
    except OSError as e:
        _error(f"Error writing to file: {e}")
        sys.exit(1)
    _dbg(f"output: file {path!r}")
    print(f"Converted text written to {path}")


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        config = load_config()
    except (OSError, ValueError) as e:
        _error(f"Config error: {e}")
        sys.exit(1)
    encoding = config["encoding"]

    markdown_text = read_input(args.file, encoding)
    slack_text = convert(markdown_text)
    write_output(slack_text, args.output, encoding)


if __name__ == "__main__":
    main()
