"""Name adapters mapping logical names to table and column names.

Two interchangeable strategies share the NameAdapter contract:

    - AnnotationNameAdapter: explicit overrides, else the logical name verbatim
    - SnakeCaseNameAdapter: explicit overrides, else the logical name in snake_case

Example:
    >>> from persistkit.naming import SnakeCaseNameAdapter
    >>> from persistkit.types import EntityShape
    >>>
    >>> adapter = SnakeCaseNameAdapter()
    >>> adapter.get_table_name(EntityShape.define("NewsArticle", ["Title"]))
    'news_article'
"""

from persistkit.naming.base import NameAdapter
from persistkit.naming.annotation import AnnotationNameAdapter
from persistkit.naming.snake_case import SnakeCaseNameAdapter, to_snake_case
from persistkit.naming.factory import create_name_adapter, get_name_adapter

__all__ = [
    "NameAdapter",
    "AnnotationNameAdapter",
    "SnakeCaseNameAdapter",
    "to_snake_case",
    "create_name_adapter",
    "get_name_adapter",
]
