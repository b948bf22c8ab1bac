"""PageRequest parsing and Page arithmetic."""

import pytest

from music_api.application.dtos.pagination import Page, PageRequest, SortOrder, parse_sort
from music_api.domain.exceptions import ValidationException

ALLOWED = {"name": object(), "durationSeconds": object()}


class TestPageRequest:
    def test_defaults(self) -> None:
        request = PageRequest.of()
        assert request.page == 0
        assert request.size == 20
        assert request.sort == (SortOrder("name", "asc"),)
        assert request.offset == 0

    def test_offset(self) -> None:
        assert PageRequest.of(page=3, size=25).offset == 75

    def test_multiple_sort_orders(self) -> None:
        request = PageRequest.of(sort=["durationSeconds,desc", "name"], allowed=ALLOWED)
        assert request.sort == (SortOrder("durationSeconds", "desc"), SortOrder("name", "asc"))
        assert request.sort[0].descending

    def test_blank_sort_values_fall_back_to_default(self) -> None:
        assert PageRequest.of(sort=["", " "]).sort == (SortOrder("name"),)

    @pytest.mark.parametrize(
        ("page", "size"),
        [(-1, 20), (0, 0), (0, 2001)],
    )
    def test_out_of_range_is_rejected(self, page: int, size: int) -> None:
        with pytest.raises(ValidationException):
            PageRequest.of(page=page, size=size)

    def test_max_size_is_accepted(self) -> None:
        assert PageRequest.of(size=2000).size == 2000


class TestParseSort:
    def test_direction_is_case_insensitive(self) -> None:
        assert parse_sort("name,DESC") == SortOrder("name", "desc")

    def test_unknown_property(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            parse_sort("email", ALLOWED)
        assert exc_info.value.details == {"field": "sort"}

    def test_unknown_direction(self) -> None:
        with pytest.raises(ValidationException):
            parse_sort("name,sideways")


class TestPage:
    def test_totals(self) -> None:
        page = Page.of(["a", "b"], PageRequest.of(page=0, size=2), total_elements=5)
        assert page.total_pages == 3
        assert page.first
        assert not page.last

    def test_last_page(self) -> None:
        page = Page.of(["e"], PageRequest.of(page=2, size=2), total_elements=5)
        assert page.last
        assert not page.first

    def test_empty(self) -> None:
        page = Page.of([], PageRequest.of(), total_elements=0)
        assert page.total_pages == 0
        assert page.first and page.last

    def test_map_keeps_totals(self) -> None:
        page = Page.of([1, 2], PageRequest.of(size=2), total_elements=4).map(str)
        assert page.content == ["1", "2"]
        assert page.total_elements == 4
        assert page.size == 2
