"""Repository translation mirror package"""

from .config import Config, ConfigError
from .translator import Translator, HttpTranslator, TranslationError, create_translator
from .file_processor import FileProcessor
from .filter import FileFilter
from .git_operations import GitOperations, RepositoryError
from .metadata import FileEntry, MetadataError, MetadataStore, TranslationMeta
from .sync_engine import FileResult, SyncEngine, SyncReport

__all__ = [
    'Config', 'ConfigError', 'Translator', 'HttpTranslator', 'TranslationError', 'create_translator',
    'FileProcessor', 'FileFilter', 'GitOperations', 'RepositoryError', 'FileEntry', 'MetadataError',
    'MetadataStore', 'TranslationMeta', 'FileResult', 'SyncEngine', 'SyncReport',
]
