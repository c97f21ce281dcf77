"""
Tests for the library search facade.
"""

import pytest
from unittest.mock import Mock

from papr.core import ExtractionError, SearchError
from papr.database.repository import PaperRecord
from papr.search.models import MatcherConfig, PageMatch, SearchMode, TitleMatch
from papr.search.service import LibrarySearch, search_fulltext, search_notes, search_titles


@pytest.fixture
def library(make_paper, fake_extractor):
    """Three papers on disk with PDFs, notes and tags."""
    attention = make_paper(
        "attention_is_all_you_need", pdf=b"attention",
        notes={"main.typ": "Scaled dot-product attention"}
    )
    gnn = make_paper("gnn_survey_2021", pdf=b"gnn")
    mamba = make_paper("mamba", notes={"main.typ": "selective state space"})

    fake_extractor.documents[b"attention"] = ["intro", "we use a transformer architecture", "conclusion"]
    fake_extractor.documents[b"gnn"] = ["graph attention networks", "a transformer for graphs"]

    return [
        PaperRecord(id=1, canonical_base_path=str(attention), url="https://a", tags=("nlp", "transformer")),
        PaperRecord(id=2, canonical_base_path=str(gnn), url="https://b", tags=("gnn", "survey")),
        PaperRecord(id=3, canonical_base_path=str(mamba), url="https://c", tags=("nlp", "ssm")),
    ]


@pytest.fixture
def search(library, fake_extractor) -> LibrarySearch:
    """Facade over an in-memory repository."""
    repository = Mock()
    repository.list_papers.return_value = library
    return LibrarySearch(repository=repository, extractor=fake_extractor, config=MatcherConfig())


class TestModuleFunctions:
    """Tests for the candidate-set search functions."""

    def test_search_titles(self, library):
        """Test ranked title search over explicit candidates."""
        matches = search_titles("attn", library)

        assert [m.record_id for m in matches] == [1]

    def test_search_fulltext(self, library, fake_extractor):
        """Test ranked page search over explicit candidates."""
        matches = search_fulltext("transformer", library, extractor=fake_extractor)

        assert all(isinstance(m, PageMatch) for m in matches)
        assert {(m.record_id, m.page_number) for m in matches} == {(1, 2), (2, 2)}
        scores = [m.score for m in matches]
        assert scores == sorted(scores, reverse=True)

    def test_search_notes(self, library):
        """Test ranked notes search over explicit candidates."""
        matches = search_notes("state space", library)

        assert [(m.record_id, m.line_number) for m in matches] == [(3, 1)]


class TestLibrarySearch:
    """Tests for LibrarySearch."""

    def test_title_search(self, search: LibrarySearch):
        """Test the default title mode."""
        report = search.search("attn")

        assert report.mode == SearchMode.TITLE
        assert [m.record_id for m in report.results] == [1]
        assert report.candidates == 3

    def test_mode_by_value(self, search: LibrarySearch):
        """Test that modes may be given as strings."""
        report = search.search("transformer", mode="fulltext")

        assert report.mode == SearchMode.FULLTEXT
        assert len(report.results) == 2

    def test_unknown_mode(self, search: LibrarySearch):
        """Test that an unknown mode raises SearchError."""
        with pytest.raises(SearchError) as exc_info:
            search.search("x", mode="semantic")

        assert exc_info.value.query == "x"

    def test_tags_restrict_candidates(self, search: LibrarySearch):
        """Test that tag filtering happens before matching."""
        report = search.search("transformer", mode=SearchMode.FULLTEXT, tags=["GNN"])

        assert [m.record_id for m in report.results] == [2]
        assert report.candidates == 1

    def test_tags_require_all(self, search: LibrarySearch):
        """Test that several tags combine with AND."""
        report = search.search("", tags=["nlp", "ssm"])

        assert [m.record_id for m in report.results] == [3]

    def test_empty_query_lists_everything(self, search: LibrarySearch):
        """Test that a blank title query returns every paper in id order."""
        report = search.search("")

        assert [(m.record_id, m.score) for m in report.results] == [(1, 0), (2, 0), (3, 0)]

    def test_limit(self, search: LibrarySearch):
        """Test that limit truncates ranked results."""
        assert len(search.search("", limit=2).results) == 2

    def test_negative_limit(self, search: LibrarySearch):
        """Test that a negative limit raises SearchError."""
        with pytest.raises(SearchError) as exc_info:
            search.search("", limit=-1)

        assert exc_info.value.query == ""

    def test_notes_mode(self, search: LibrarySearch):
        """Test notes search through the facade."""
        results = search.search_notes("attention")

        assert [(m.record_id, m.note_file) for m in results] == [(1, "main.typ")]

    def test_missing_pdf_is_not_a_warning(self, search: LibrarySearch):
        """Test that the paper without a PDF produces no warning."""
        report = search.search("transformer", mode=SearchMode.FULLTEXT)

        assert report.warnings == []

    def test_extraction_failure(self, search: LibrarySearch, fake_extractor):
        """Test skip-with-warning by default and abort in strict mode."""
        fake_extractor.documents[b"gnn"] = ExtractionError("pdfplumber extraction failed")

        report = search.search("transformer", mode=SearchMode.FULLTEXT)
        assert [m.record_id for m in report.results] == [1]
        assert len(report.warnings) == 1

        with pytest.raises(ExtractionError):
            search.search("transformer", mode=SearchMode.FULLTEXT, strict=True)

    def test_convenience_methods(self, search: LibrarySearch):
        """Test the per-mode shortcuts."""
        assert all(isinstance(m, TitleMatch) for m in search.search_titles(""))
        assert all(isinstance(m, PageMatch) for m in search.search_fulltext("transformer"))

    def test_store_is_only_read(self, search: LibrarySearch):
        """Test that searching reads records and never writes."""
        search.search("attn")

        calls = [name for name, _, _ in search.repository.method_calls]
        assert calls == ["list_papers"]
