"""
Tests for list pagination and search helpers.
"""
from webacademy.core.pagination import Page, PageParams, escape_like, page_params, paginated, search_clause
from webacademy.infrastructure.database.models import Course


class TestPageParams:
    def test_no_limit_disables_pagination(self):
        assert not page_params(limit=None, page=None).enabled
        assert not page_params(limit=0, page=3).enabled

    def test_limit_and_page_are_clamped(self):
        params = page_params(limit=1000, page=-4)
        assert params.limit == 100
        assert params.page == 1
        assert page_params(limit=-5, page=None).limit == 1

    def test_offset(self):
        assert PageParams(limit=10, page=2).offset == 10

    def test_paginated_shapes(self):
        assert paginated([1, 2], 2, PageParams()) == [1, 2]
        page = paginated([1, 2], 7, PageParams(limit=2, page=1))
        assert isinstance(page, Page)
        assert page.total == 7
        assert page.data == [1, 2]


class TestSearch:
    def test_like_metacharacters_are_escaped(self):
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"

    def test_blank_search_adds_no_condition(self):
        assert search_clause(None, Course.title) is None
        assert search_clause("   ", Course.title) is None

    def test_search_spans_columns(self):
        clause = search_clause("algo", Course.title, Course.description)
        compiled = str(clause.compile(compile_kwargs={"literal_binds": True})).lower()
        assert "course.title" in compiled
        assert "course.description" in compiled
