"""
Validation module for storage-audit.

Provides command argument validation, the error taxonomy, and exit-code
classification.
"""

from validation.arguments import optional_bag_filter, require_bucket_id, require_path
from validation.errors import (
    ArgumentValidationError,
    AuditError,
    CatalogNotFoundError,
    CatalogParseError,
    LocalPathError,
    TransportError,
    exit_code_for,
)

__all__ = [
    'optional_bag_filter',
    'require_bucket_id',
    'require_path',
    'ArgumentValidationError',
    'AuditError',
    'CatalogNotFoundError',
    'CatalogParseError',
    'LocalPathError',
    'TransportError',
    'exit_code_for',
]
