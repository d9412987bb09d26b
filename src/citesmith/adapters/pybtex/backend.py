"""pybtex output backend producing AsciiDoc inline markup."""

from __future__ import annotations

from pybtex.backends import BaseBackend


class AsciiDocBackend(BaseBackend):
    """Render pybtex rich text as AsciiDoc.

    Only inline formatting is produced; entries are assembled by the caller.
    """

    default_suffix = ".adoc"
    symbols = {
        "ndash": "&#8211;",
        "newblock": " ",
        "nbsp": "&#160;",
    }
    tags = {
        "em": "_",
        "emph": "_",
        "i": "_",
        "strong": "*",
        "b": "*",
        "sup": "^",
        "sub": "~",
    }

    def format_str(self, str_: str) -> str:
        return str_

    def format_protected(self, text: str) -> str:
        return text

    def format_tag(self, tag_name: str, text: str) -> str:
        if not text:
            return ""
        marker = self.tags.get(tag_name)
        if marker is None:
            return text
        return f"{marker}{text}{marker}"

    def format_href(self, url: str, text: str, external: bool = False) -> str:
        if not text or text == url:
            return url
        return f"{url}[{text}]"

    def write_entry(self, key: str, label: str, text: str) -> None:
        self.output(f"[[{key}]] {text}\n")


__all__ = ["AsciiDocBackend"]
