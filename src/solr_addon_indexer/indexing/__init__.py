"""
Indexing Package

The extraction → mapping → document pipeline.
"""

from .records import Record, RowRecord, Storage, SelectSpec, Tag, MetadataText
from .sanitize import filter_html, strip_tags
from .document import SolrDocument
from .fields import FieldValueResolver
from .visibility import VisibilityResolver
from .mapper import DocumentMapper, make_solr_name
from .indexer import AddonIndexer

__all__ = [
    "Record",
    "RowRecord",
    "Storage",
    "SelectSpec",
    "Tag",
    "MetadataText",
    "filter_html",
    "strip_tags",
    "SolrDocument",
    "FieldValueResolver",
    "VisibilityResolver",
    "DocumentMapper",
    "make_solr_name",
    "AddonIndexer",
]
