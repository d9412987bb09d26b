from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path

import pytest

from citesmith import Processor
from citesmith.core.citations import combine_consecutive_numbers
from citesmith.core.exceptions import CitationError, StyleRenderError, UnknownReferenceError
from citesmith.core.macros import extract_macros


FIXTURE_BIB = Path(__file__).resolve().parent / "fixtures" / "bib" / "test.bib"


class _StaticRenderer:
    def __init__(self, citations: dict[str, str], failing: Iterable[str] = ()) -> None:
        self.citations = citations
        self.failing = set(failing)
        self.requests: list[tuple[str, bool]] = []

    def render_citation(self, key: str, *, narrative: bool = False) -> str:
        self.requests.append((key, narrative))
        if key in self.failing:
            raise StyleRenderError(key, "boom")
        return self.citations[key]

    def render_bibliography(self, key: str) -> str:
        raise StyleRenderError(key, "not used")


def _processor(*lines: str, **options: object) -> Processor:
    processor = Processor(FIXTURE_BIB, **options)
    for line in lines:
        processor.process_citation_macros(line)
    return processor


def _render(processor: Processor, line: str) -> str:
    return processor.replace_citation_macros(line)


@pytest.mark.parametrize(
    ("values", "expected"),
    [
        ([1, 2, 3], "1-3"),
        ([1, 2], "1,2"),
        ([1, 3, 4, 5], "1,3-5"),
        ([5], "5"),
        ([], ""),
        ([3, 1, 2], "3,1,2"),
        (["1", "2", "3, p. 4", "5"], "1,2,3, p. 4,5"),
        (["1", "²", "3"], "1,²,3"),
        (["٣", "٤", "٥"], "٣,٤,٥"),
    ],
)
def test_combine_consecutive_numbers(values: list[object], expected: str) -> None:
    assert combine_consecutive_numbers(values) == expected


def test_first_cited_key_renders_as_one() -> None:
    processor = _processor("cite:[smith10]", style="ieee")
    assert _render(processor, "cite:[smith10]") == "[1]"


def test_numeric_indices_follow_author_order() -> None:
    line = "cite:[smith10, brown09, lane12a]"
    processor = _processor(line)

    assert processor.cites() == ["brown09", "lane12a", "smith10"]
    assert _render(processor, line) == "[3, 1, 2]"
    assert _render(processor, "cite:[brown09, lane12a, smith10]") == "[1-3]"
    assert _render(processor, "cite:[brown09, smith10]") == "[1, 3]"


def test_same_key_keeps_its_index_across_lines() -> None:
    lines = ["cite:[smith10]", "text", "cite:[lane12a] and cite:[smith10]"]
    processor = _processor(*lines)
    first = _render(processor, lines[0])
    last = _render(processor, lines[2])
    assert first == "[2]"
    assert last == "[1] and [2]"


def test_numeric_appearance_order() -> None:
    lines = ["cite:[smith10]", "cite:[brown09, smith10]", "cite:[anderson15]"]
    processor = _processor(*lines, numeric_in_appearance_order=True)

    assert processor.cites() == ["smith10", "brown09", "anderson15"]
    assert _render(processor, lines[1]) == "[2, 1]"
    assert _render(processor, "cite:[smith10, brown09, anderson15]") == "[1-3]"


@pytest.mark.parametrize(
    ("macro", "expected"),
    [
        ("cite:[smith10(12)]", "[1, p. 12]"),
        ("cite:[smith10(12-15)]", "[1, pp. 12-15]"),
        ("cite:see[smith10]", "see [1]"),
        ("citenp:[smith10]", "[1]"),
    ],
)
def test_numeric_locators_and_pretext(macro: str, expected: str) -> None:
    processor = _processor(macro)
    assert _render(processor, macro) == expected


def test_numeric_links_escape_commas_and_skip_compaction() -> None:
    line = "cite:[brown09, lane12a, smith10(12)]"
    processor = _processor(line, links=True)
    assert _render(processor, line) == (
        "[<<brown09,1>>, <<lane12a,2>>, <<smith10,3&#44; p. 12>>]"
    )


def test_locator_fragment_breaks_numeric_run() -> None:
    line = "cite:[brown09(4), lane12a, smith10]"
    processor = _processor(line)
    assert _render(processor, line) == "[1, p. 4, 2, 3]"


@pytest.mark.parametrize(
    ("style", "macro", "expected"),
    [
        ("chicago-author-date", "cite:[smith10]", "(Smith 2010)"),
        ("chicago-author-date", "cite:[smith10(12)]", "(Smith 2010, 12)"),
        ("chicago-author-date", "cite:[smith10, lane12a]", "(Smith 2010; Lane and Gobet 2012)"),
        ("chicago-author-date", "cite:see[smith10]", "(see Smith 2010)"),
        ("chicago-author-date", "citenp:[smith10(12)]", "Smith (2010, 12)"),
        ("chicago-author-date", "cite:[brown09]", "(Brown 2009)"),
        ("chicago-author-date", "cite:[anderson15]", "(Anderson, Baker and Carter 2015)"),
        ("chicago-author-date", "cite:[vanrossum91]", "(van Rossum 1991)"),
        ("chicago-author-date", "cite:[who2020]", "(World Health Organization 2020)"),
        ("apa", "cite:[smith10(12-15)]", "(Smith, 2010, pp. 12-15)"),
        ("apa", "cite:[anderson15]", "(Anderson et al., 2015)"),
        ("apa", "citenp:as shown by[smith10(7)]", "as shown by Smith (2010, p. 7)"),
    ],
)
def test_author_date_citations(style: str, macro: str, expected: str) -> None:
    processor = _processor(macro, style=style)
    assert _render(processor, macro) == expected


def test_author_date_locale_terms() -> None:
    processor = _processor("cite:[lane12a]", style="chicago-author-date", locale="fr-FR")
    assert _render(processor, "cite:[lane12a]") == "(Lane et Gobet 2012)"


def test_author_date_links() -> None:
    processor = _processor("cite:[smith10(12)]", style="chicago-author-date", links=True)
    assert _render(processor, "cite:[smith10(12)]") == "(<<smith10,Smith 2010&#44; 12>>)"


def test_narrative_locator_follows_first_year_occurrence() -> None:
    renderer = _StaticRenderer({"smith10": "Smith 2010 Group (2010)"})
    processor = Processor(FIXTURE_BIB, style="apa", style_renderer=renderer)
    processor.process_citation_macros("citenp:[smith10(5)]")

    result = _render(processor, "citenp:[smith10(5)]")

    assert result == "Smith 2010, p. 5 Group (2010)"
    assert renderer.requests == [("smith10", True)]


@pytest.mark.parametrize(
    ("locale", "expected"),
    [("en-US", "Doe (n.d., p. 7) notes"), ("de-DE", "Doe (o. J., p. 7) notes")],
)
def test_narrative_locator_without_year_stays_in_parentheses(
    tmp_path: Path, locale: str, expected: str
) -> None:
    bib = tmp_path / "undated.bib"
    bib.write_text("@misc{undated, author = {Doe, Jane}, title = {Notes}}\n", encoding="utf-8")
    line = "citenp:[undated(7)] notes"
    processor = Processor(bib, style="harvard", locale=locale)
    processor.process_citation_macros(line)

    assert _render(processor, line) == expected


def test_style_render_failure_falls_back_to_key(caplog: pytest.LogCaptureFixture) -> None:
    renderer = _StaticRenderer({"smith10": "Smith 2010"}, failing={"brown09"})
    processor = Processor(FIXTURE_BIB, style="harvard", style_renderer=renderer)
    processor.process_citation_macros("cite:[smith10, brown09]")

    with caplog.at_level(logging.WARNING):
        result = _render(processor, "cite:[smith10, brown09]")

    assert result == "(Smith 2010; brown09)"
    assert any("brown09" in record.getMessage() for record in caplog.records)


@pytest.mark.parametrize(
    ("style", "expected"),
    [("ieee", "[nope2021]"), ("apa", "(nope2021)")],
)
def test_unknown_key_is_lenient_by_default(
    style: str, expected: str, caplog: pytest.LogCaptureFixture
) -> None:
    processor = _processor("cite:[nope2021]", style=style)
    with caplog.at_level(logging.WARNING):
        result = _render(processor, "cite:[nope2021]")

    assert result == expected
    assert "Unknown reference: nope2021" in caplog.text


def test_unknown_key_does_not_stop_siblings() -> None:
    line = "cite:[nope2021, smith10]"
    processor = _processor(line)
    assert _render(processor, line) == "[nope2021, 2]"


def test_unknown_non_ascii_digit_key_does_not_break_compaction(
    caplog: pytest.LogCaptureFixture,
) -> None:
    line = "cite:[smith10, ²]"
    processor = _processor(line)
    with caplog.at_level(logging.WARNING):
        result = _render(processor, line)

    assert result == "[1, ²]"
    assert "Unknown reference: ²" in caplog.text


def test_unknown_key_raises_in_strict_mode() -> None:
    processor = _processor("cite:[nope2021]", throw_on_unknown=True)
    with pytest.raises(UnknownReferenceError) as excinfo:
        _render(processor, "cite:[nope2021]")
    assert excinfo.value.key == "nope2021"
    assert "nope2021" in str(excinfo.value)


def test_numeric_index_requires_harvesting() -> None:
    processor = Processor(FIXTURE_BIB)
    with pytest.raises(CitationError, match="harvest"):
        _render(processor, "cite:[smith10]")


def test_repeated_rendering_does_not_leak_locators() -> None:
    processor = _processor("cite:[smith10(3)]", style="apa")
    assert _render(processor, "cite:[smith10(3)]") == "(Smith, 2010, p. 3)"
    assert _render(processor, "cite:[smith10]") == "(Smith, 2010)"


@pytest.mark.parametrize(
    ("output", "macro", "expected"),
    [
        ("latex", "cite:[smith10(12), brown09]", "+++\\cite[p. 12]{smith10},\\cite{brown09}+++"),
        ("bibtex", "citenp:[smith10]", "+++\\cite{smith10}+++"),
        ("biblatex", "cite:[smith10]", "+++\\parencite{smith10}+++"),
        ("biblatex", "citenp:[smith10]", "+++\\textcite{smith10}+++"),
        ("latex", "cite:see[nope2021]", "see +++\\cite{nope2021}+++"),
    ],
)
def test_typesetting_outputs(output: str, macro: str, expected: str) -> None:
    processor = _processor(macro, output=output)
    assert _render(processor, macro) == expected


def test_complete_citation_accepts_parsed_macro() -> None:
    processor = _processor("cite:[lane12a]")
    (macro,) = extract_macros("cite:[lane12a]")
    assert processor.complete_citation(macro) == "[1]"
