import pytest

from doclink.enums import LookupSource
from doclink.models.core import Document
from doclink.services.lookup import lookup, lookup_recent, lookup_search
from doclink.services.store import StoreError
from doclink.services.validation import ValidationError
from tests.helpers import create_document, create_documents, mark_recent


def test_third_page_of_25_rows_returns_remaining_five(db_session):
    create_documents(db_session, 25)
    result = lookup_search(db_session, term=None, page=3, page_size=10, max_page_size=200)
    assert result.has_next is False
    assert result.has_previous is True
    assert len(result.files) == 5
    assert [item["title"] for item in result.files] == [f"file-{index:03d}" for index in range(20, 25)]


def test_more_rows_than_page_size_sets_has_next_and_truncates(db_session):
    create_documents(db_session, 25)
    result = lookup_search(db_session, term="", page=1, page_size=10, max_page_size=200)
    assert result.has_next is True
    assert result.has_previous is False
    assert len(result.files) == 10
    assert result.files[0]["title"] == "file-000"


def test_exactly_page_size_remaining_rows_has_no_next_page(db_session):
    create_documents(db_session, 20)
    result = lookup_search(db_session, term=None, page=2, page_size=10, max_page_size=200)
    assert result.has_next is False
    assert len(result.files) == 10


@pytest.mark.parametrize("page, expected", [(1, False), (2, True), (4, True)])
def test_has_previous_tracks_page_number(db_session, page, expected):
    create_documents(db_session, 3)
    result = lookup_search(db_session, term=None, page=page, page_size=1, max_page_size=200)
    assert result.has_previous is expected


def test_page_past_the_end_is_empty(db_session):
    create_documents(db_session, 3)
    result = lookup_search(db_session, term=None, page=5, page_size=2, max_page_size=200)
    assert result.files == []
    assert result.has_next is False
    assert result.has_previous is True


def test_search_matches_title_and_full_file_name(db_session):
    create_document(db_session, title="Budget 2026", file_extension="xlsx", minutes_ago=1)
    create_document(db_session, title="budget notes", file_extension="docx", minutes_ago=2)
    create_document(db_session, title="Roadmap", file_extension="pptx", minutes_ago=3)
    db_session.commit()

    by_title = lookup_search(db_session, term="  BUDGET ", page=1, page_size=10, max_page_size=200)
    assert [item["title"] for item in by_title.files] == ["Budget 2026", "budget notes"]

    by_file_name = lookup_search(db_session, term="roadmap.pptx", page=1, page_size=10, max_page_size=200)
    assert [item["title"] for item in by_file_name.files] == ["Roadmap"]


def test_search_treats_wildcards_literally(db_session):
    create_document(db_session, title="100% done", minutes_ago=1)
    create_document(db_session, title="1000 items", minutes_ago=2)
    db_session.commit()
    result = lookup_search(db_session, term="100%", page=1, page_size=10, max_page_size=200)
    assert [item["title"] for item in result.files] == ["100% done"]


def test_recent_is_restricted_to_the_viewer(db_session):
    documents = create_documents(db_session, 6)
    mark_recent(db_session, "viewer-a", documents[:4])
    mark_recent(db_session, "viewer-b", documents[4:])

    first = lookup_recent(db_session, viewer_id="viewer-a", page=1, page_size=3, max_page_size=200)
    assert first.has_next is True
    assert [item["document_id"] for item in first.files] == [doc.document_id for doc in documents[:3]]

    second = lookup_recent(db_session, viewer_id="viewer-a", page=2, page_size=3, max_page_size=200)
    assert second.has_next is False
    assert [item["document_id"] for item in second.files] == [documents[3].document_id]


def test_result_shape_matches_across_sources(db_session):
    documents = create_documents(db_session, 2)
    mark_recent(db_session, "viewer-a", documents)
    recent = lookup(db_session, LookupSource.recent, page=1, page_size=5, max_page_size=200, viewer_id="viewer-a")
    search = lookup(db_session, LookupSource.search, page=1, page_size=5, max_page_size=200)
    assert recent.files == search.files
    assert set(recent.files[0]) == {
        "document_id",
        "title",
        "file_extension",
        "file_type",
        "owner_name",
        "last_modified_at",
    }


def test_recent_requires_viewer(db_session):
    with pytest.raises(ValidationError, match="viewer_id is required"):
        lookup(db_session, LookupSource.recent, page=1, page_size=5, max_page_size=200, viewer_id=" ")


def test_invalid_page_is_rejected_before_querying(db_session):
    with pytest.raises(ValidationError, match="page must be >= 1"):
        lookup_search(db_session, term=None, page=0, page_size=10, max_page_size=200)
    with pytest.raises(ValidationError, match="page_size must be a positive integer"):
        lookup_search(db_session, term=None, page=1, page_size="ten", max_page_size=200)


def test_store_failure_is_reported_as_store_error(db_session):
    db_session.commit()
    Document.__table__.drop(db_session.get_bind())
    with pytest.raises(StoreError, match="file lookup failed"):
        lookup_search(db_session, term=None, page=1, page_size=10, max_page_size=200)
