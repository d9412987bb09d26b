"""Two-pass document driver around `Processor`."""

from __future__ import annotations

from collections.abc import Iterable
import re

from citesmith.processor import Processor


BIBLIOGRAPHY_MACRO_RE = re.compile(r"^\s*bibliography::\[\]\s*$")
_VERBATIM_DELIMITER_RE = re.compile(r"^(-{4,}|\.{4,})\s*$")


def _scannable(lines: list[str]) -> list[bool]:
    """Flag the lines outside listing and literal blocks."""
    flags: list[bool] = []
    delimiter: str | None = None
    for line in lines:
        match = _VERBATIM_DELIMITER_RE.match(line)
        if delimiter is None:
            if match:
                delimiter = match.group(1)
                flags.append(False)
                continue
            flags.append(True)
            continue
        if match and match.group(1) == delimiter:
            delimiter = None
        flags.append(False)
    return flags


def process_lines(lines: Iterable[str], processor: Processor) -> list[str]:
    """Replace citation macros and the bibliography block macro in *lines*."""
    source = list(lines)
    scannable = _scannable(source)

    for line, scan in zip(source, scannable, strict=True):
        if scan:
            processor.process_citation_macros(line)
    processor.emitter.event(
        "citations_harvested",
        {"count": len(processor.citations), "lines": len(source)},
    )

    output: list[str] = []
    for line, scan in zip(source, scannable, strict=True):
        if not scan:
            output.append(line)
        elif BIBLIOGRAPHY_MACRO_RE.match(line):
            output.extend(processor.build_bibliography_list())
        else:
            output.append(processor.replace_citation_macros(line))
    return output


def process_text(text: str, processor: Processor) -> str:
    """Process a whole document held in a string."""
    lines = text.splitlines()
    result = "\n".join(process_lines(lines, processor))
    if text.endswith("\n"):
        result += "\n"
    return result


__all__ = ["BIBLIOGRAPHY_MACRO_RE", "process_lines", "process_text"]
