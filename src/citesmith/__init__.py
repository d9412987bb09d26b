"""Primary public API for citesmith."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from citesmith.adapters.pybtex import AsciiDocBackend, PybtexStyleRenderer
from citesmith.core.bibliography import (
    BibliographyBuilder,
    BibliographyCollection,
    BibliographyIssue,
    ReferenceEntry,
)
from citesmith.core.citations import CitationRenderer, combine_consecutive_numbers
from citesmith.core.config import OutputTarget, ProcessorConfig
from citesmith.core.context import CitationState
from citesmith.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from citesmith.core.exceptions import (
    CitationError,
    ConfigurationError,
    StyleRenderError,
    UnknownReferenceError,
)
from citesmith.core.macros import CitationItem, CitationMacro, CitationType, extract_macros
from citesmith.core.ordering import CitationOrder
from citesmith.core.rendering import StyleRenderer
from citesmith.core.styles import STYLES, StylePolicy, get_style
from citesmith.pipeline import process_lines, process_text
from citesmith.processor import Processor


try:
    __version__ = _pkg_version("citesmith")
except PackageNotFoundError:
    __version__ = "0.0.0"


__all__ = [
    "STYLES",
    "AsciiDocBackend",
    "BibliographyBuilder",
    "BibliographyCollection",
    "BibliographyIssue",
    "CitationError",
    "CitationItem",
    "CitationMacro",
    "CitationOrder",
    "CitationRenderer",
    "CitationState",
    "CitationType",
    "ConfigurationError",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "OutputTarget",
    "Processor",
    "ProcessorConfig",
    "PybtexStyleRenderer",
    "ReferenceEntry",
    "StylePolicy",
    "StyleRenderError",
    "StyleRenderer",
    "UnknownReferenceError",
    "__version__",
    "combine_consecutive_numbers",
    "extract_macros",
    "get_style",
    "process_lines",
    "process_text",
]
