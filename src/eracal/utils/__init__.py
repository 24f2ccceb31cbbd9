"""
eracal ユーティリティモジュール
"""

from .numerals import (
    parse_number,
    NUMERAL_CHARS,
)
from .patterns import (
    ERA_DATE_PATTERN,
    strip_year_suffix,
    clean_heading,
)
from .fs import (
    sanitize_filename,
    load_yaml_mapping,
    load_json,
    write_json,
    write_text,
)

__all__ = [
    # numerals
    'parse_number',
    'NUMERAL_CHARS',
    # patterns
    'ERA_DATE_PATTERN',
    'strip_year_suffix',
    'clean_heading',
    # fs
    'sanitize_filename',
    'load_yaml_mapping',
    'load_json',
    'write_json',
    'write_text',
]
