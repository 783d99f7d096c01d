from __future__ import annotations
import os
from pathlib import Path
from typing import List

from .config import ConverterConfig
from .timeline import ConversionResult, TrackResult

def _track_lines(tr: TrackResult, cfg: ConverterConfig) -> List[str]:
    lines = [f"---track {tr.index + 1}"]
    if not tr.ok:
        lines.append(f"!!! {type(tr.error).__name__}: {tr.error}")
        return lines
    for vi, tokens in enumerate(tr.voices, start=1):
        lines.append(f"-----voice {vi}")
        lines.append(cfg.delimiter.join(tokens))
    return lines

def format_result(result: ConversionResult, cfg: ConverterConfig) -> str:
    lines: List[str] = []
    for tr in result.tracks:
        lines.extend(_track_lines(tr, cfg))
    return "\n".join(lines) + "\n"

def write_text(result: ConversionResult, out_path: str, cfg: ConverterConfig):
    Path(out_path).write_text(format_result(result, cfg), encoding="utf-8")

def write_tracks_separately(
    result: ConversionResult,
    out_dir: str,
    cfg: ConverterConfig,
    template: str = "{index:02d}-track.txt",
) -> List[str]:
    """
    One file per successfully converted track, one token line per voice.
    - template: placeholder {index} is the 1-based track number
    Failed tracks produce no file. Returns the written paths.
    """
    os.makedirs(out_dir, exist_ok=True)
    written = []
    for tr in result.tracks:
        if not tr.ok:
            continue
        path = os.path.join(out_dir, template.format(index=tr.index + 1))
        body = "\n".join(cfg.delimiter.join(tokens) for tokens in tr.voices)
        Path(path).write_text(body + "\n" if body else "", encoding="utf-8")
        written.append(path)
    return written
