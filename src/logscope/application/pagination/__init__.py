"""Application pagination – self-normalising page request and page container."""
from logscope.application.pagination.page import Page
from logscope.application.pagination.page_request import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PageRequest

__all__ = ["DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "Page", "PageRequest"]
