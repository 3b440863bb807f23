from .dispatcher import BatchDispatcher, reduce_results
from .source_parser import load_urls_from_csv, parse_urls

__all__ = ["BatchDispatcher", "reduce_results", "load_urls_from_csv", "parse_urls"]
