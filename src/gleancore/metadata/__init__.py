"""Metadata and author resolution."""

from .author_extractor import AuthorExtractor, extract_selector_author
from .date_extractor import DateExtractor, parse_date
from .metadata_extractor import MetadataExtractor
from .structured_data_parser import StructuredDataParser

__all__ = [
    "AuthorExtractor",
    "DateExtractor",
    "MetadataExtractor",
    "StructuredDataParser",
    "extract_selector_author",
    "parse_date",
]
