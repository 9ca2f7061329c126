"""Utils module."""

from .helpers import (
    format_date,
    format_file_size_mb,
    truncate_text,
)
from .parsing import TextParser
from .paths import StoragePathGenerator
from .logger import setup_logger

__all__ = [
    'format_date',
    'format_file_size_mb',
    'truncate_text',
    'TextParser',
    'StoragePathGenerator',
    'setup_logger'
]
