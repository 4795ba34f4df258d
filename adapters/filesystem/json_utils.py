from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson


def load_json(path: Path) -> dict[str, Any]:
    data = orjson.loads(path.read_bytes())
    return data if isinstance(data, dict) else {}


def load_json_text(content: str) -> dict[str, Any]:
    data = orjson.loads(content)
    return data if isinstance(data, dict) else {}


def write_text_atomic(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(f"{path.suffix}.tmp")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.replace(path)


def strip_json_comments(content: str) -> str:
    result_lines: list[str] = []
    for line in content.splitlines():
        in_string = False
        escaped = False
        cleaned = []
        for idx, char in enumerate(line):
            if not escaped and char == '"':
                in_string = not in_string
            if not in_string and char == "/" and idx + 1 < len(line) and line[idx + 1] == "/":
                break
            cleaned.append(char)
            escaped = char == "\\" and not escaped
        result_lines.append("".join(cleaned))
    return "\n".join(result_lines)
