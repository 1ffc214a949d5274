import pytest

from doclink.services.lookup import PageRequest, build_page_request
from doclink.services.utils import escape_like, normalize_ids
from doclink.services.validation import ValidationError, coerce_positive_int


def test_page_request_derives_skip_and_limit():
    request = PageRequest(page=3, page_size=10)
    assert request.skip == 20
    assert request.limit == 11
    assert PageRequest(page=1, page_size=5).skip == 0


@pytest.mark.parametrize("raw, expected", [(2, 2), (2.0, 2), ("3", 3), (" 4 ", 4), ("5.0", 5)])
def test_coerce_positive_int_accepts_loose_numbers(raw, expected):
    assert coerce_positive_int(raw, "page") == expected


@pytest.mark.parametrize("raw", [0, -1, "0", "-3", 1.5, "abc", "", None, True, float("nan"), "inf", [1]])
def test_coerce_positive_int_rejects_invalid_values(raw):
    with pytest.raises(ValidationError):
        coerce_positive_int(raw, "page_size")


def test_coerce_positive_int_message_names_the_field():
    with pytest.raises(ValidationError, match="page_size must be >= 1"):
        coerce_positive_int(0, "page_size")


def test_build_page_request_enforces_max_page_size():
    assert build_page_request("2", 50, max_page_size=50) == PageRequest(page=2, page_size=50)
    with pytest.raises(ValidationError, match="page_size must be <= 50"):
        build_page_request(1, 51, max_page_size=50)


def test_normalize_ids_strips_blanks_and_duplicates_keeping_order():
    assert normalize_ids([" acc_2", "acc_1", "", "acc_2", "  "]) == ["acc_2", "acc_1"]
    assert normalize_ids(None) == []


def test_escape_like_escapes_wildcards():
    assert escape_like("100%_done") == "100\\%\\_done"


def test_coerce_positive_int_keeps_precision_of_large_digit_strings():
    assert coerce_positive_int("9007199254740993", "page") == 9007199254740993


@pytest.mark.parametrize("page", ["1e18", "1e30", 2**62])
def test_build_page_request_rejects_offsets_beyond_sql_integer_range(page):
    with pytest.raises(ValidationError, match="page is too large"):
        build_page_request(page, 10, max_page_size=200)


def test_build_page_request_accepts_largest_safe_page():
    largest = (2**63 - 1 - 11) // 10 + 1
    assert build_page_request(largest, 10, max_page_size=200).page == largest
