"""Configuration models used by the citation processor.

ProcessorConfig

`links` (`bool`)
: Wrap every rendered citation in an AsciiDoc cross reference pointing at
  the bibliography anchor of the cited key. Commas inside the link text are
  escaped as `&#44;` and numeric range compaction is disabled.

`style` (`str`)
: Citation style identifier. Must be one of the styles declared in
  `citesmith.core.styles.STYLES`, e.g. `ieee` or `chicago-author-date`.

`locale` (`str`)
: BCP 47 locale forwarded to the style renderer for connective words such
  as "and" and "et al.".

`numeric_in_appearance_order` (`bool`)
: For numeric styles, number references by first appearance in the
  document instead of sorting them by author and year.

`output` (`OutputTarget`)
: `asciidoc` renders citations as text. `latex`, `bibtex` and `biblatex`
  emit passthrough LaTeX citation commands instead and leave the
  bibliography to the LaTeX toolchain.

`throw_on_unknown` (`bool`)
: Abort with `UnknownReferenceError` when a cited key is missing from the
  database instead of printing the raw key.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigurationError
from .styles import STYLES, StylePolicy, get_style, normalise_style_name


class OutputTarget(str, Enum):
    """Markup flavour produced for citations and the bibliography."""

    ASCIIDOC = "asciidoc"
    LATEX = "latex"
    BIBTEX = "bibtex"
    BIBLATEX = "biblatex"

    @property
    def is_typesetting(self) -> bool:
        """Return whether citations are emitted as LaTeX commands."""
        return self is not OutputTarget.ASCIIDOC


class ProcessorConfig(BaseModel):
    """Options controlling citation and bibliography rendering."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    links: bool = False
    style: str = "ieee"
    locale: str = "en-US"
    numeric_in_appearance_order: bool = False
    output: OutputTarget = OutputTarget.ASCIIDOC
    throw_on_unknown: bool = False

    @field_validator("style")
    @classmethod
    def _validate_style(cls, value: str) -> str:
        name = normalise_style_name(value)
        if name not in STYLES:
            known = ", ".join(sorted(STYLES))
            raise ValueError(f"unknown citation style '{value}' (known styles: {known})")
        return name

    @field_validator("locale")
    @classmethod
    def _validate_locale(cls, value: str) -> str:
        locale = value.strip()
        if not locale:
            raise ValueError("locale must not be empty")
        return locale

    @property
    def policy(self) -> StylePolicy:
        """Return the style policy selected by `style`."""
        return get_style(self.style)

    @property
    def ordered_by_appearance(self) -> bool:
        """Return whether references are numbered in order of first citation."""
        return self.policy.numeric and self.numeric_in_appearance_order


def build_config(config: ProcessorConfig | None = None, **options: object) -> ProcessorConfig:
    """Return a validated configuration, merging keyword overrides."""
    try:
        if config is None:
            return ProcessorConfig(**options)  # type: ignore[arg-type]
        if not options:
            return config
        return ProcessorConfig(**{**config.model_dump(), **options})
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid processor configuration: {details}") from exc


__all__ = ["OutputTarget", "ProcessorConfig", "build_config"]
