"""Application search – filtered, paginated log search."""
from logscope.application.search.request import SearchRequest
from logscope.application.search.result import LogRecordView, SearchResult
from logscope.application.search.service import LogSearchService

__all__ = ["LogRecordView", "LogSearchService", "SearchRequest", "SearchResult"]
