# core/lrc.py
from __future__ import annotations

import re
from typing import List, Tuple

_TS_RE = re.compile(r"\[(\d+):(\d+)(?:\.(\d+))?\]")
_META_TAGS = ("[ar:", "[ti:", "[al:", "[by:", "[offset:", "[au:", "[length:", "[re:", "[ve:")


def _ts_to_ms(mm: str, ss: str, frac: str | None) -> int:
    m = int(mm)
    s = int(ss)
    if frac is None:
        ms = 0
    elif len(frac) == 1:
        ms = int(frac) * 100
    elif len(frac) == 2:
        ms = int(frac) * 10
    else:
        ms = int(frac[:3])
    return (m * 60 + s) * 1000 + ms


def format_timestamp(ms: int) -> str:
    """Format milliseconds as mm:ss.xx (centiseconds)."""
    if ms < 0:
        ms = 0
    total_s = ms // 1000
    cs = (ms % 1000) // 10
    return f"{total_s // 60:02d}:{total_s % 60:02d}.{cs:02d}"


def format_duration(seconds: float | None) -> str:
    if seconds is None:
        return ""
    total = int(round(seconds))
    return f"{total // 60}:{total % 60:02d}"


def parse_lrc(lrc_text: str | None) -> List[Tuple[int, str]]:
    """
    Returns list of (time_ms, text) sorted by time.
    Lines may carry several timestamps; metadata tags are skipped.
    Empty timed lines are kept as "" so instrumental gaps stay visible.
    """
    out: List[Tuple[int, str]] = []
    if not lrc_text:
        return out

    for raw_line in lrc_text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(_META_TAGS):
            continue

        matches = list(_TS_RE.finditer(line))
        if not matches:
            continue

        text = _TS_RE.sub("", line).strip()
        for m in matches:
            out.append((_ts_to_ms(m.group(1), m.group(2), m.group(3)), text))

    out.sort(key=lambda x: x[0])
    return out
