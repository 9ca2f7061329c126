"""VocabHub - vocabulary learning front end for a Supabase project."""

__version__ = "1.0.0"

from .context import AppContext, create_app_context
from .errors import VocabHubError

__all__ = [
    '__version__',
    'AppContext',
    'create_app_context',
    'VocabHubError',
]
