"""
Vending services - Business logic layer.

This package contains all business operations for the vending app:
- Metrics calculation (pure)
- Collection validation
- Collection CRUD with duplicate protection
- Summary statistics
"""

# Metrics
from .calculations import (
    CollectionCalculations,
    calculate_collection_metrics,
    calculate_exchange_total,
    is_exchange_balanced,
    get_current_week_number,
)

# Validation
from .validation import validate_collection_data

# Collection Management
from .collection_management import (
    parse_collection_id,
    find_duplicate_collection,
    create_collection,
    get_collection_by_id,
    update_collection,
    delete_collection,
    list_collections,
    paginate_collections,
)

# Statistics
from .summary import summarize_collections

# Domain Exceptions
from .exceptions import (
    CollectionsServiceError,
    CollectionValidationError,
    DuplicateCollectionError,
    CollectionNotFoundError,
    MalformedCollectionInputError,
)

__all__ = [
    # Metrics
    'CollectionCalculations',
    'calculate_collection_metrics',
    'calculate_exchange_total',
    'is_exchange_balanced',
    'get_current_week_number',
    # Validation
    'validate_collection_data',
    # Collection Management
    'parse_collection_id',
    'find_duplicate_collection',
    'create_collection',
    'get_collection_by_id',
    'update_collection',
    'delete_collection',
    'list_collections',
    'paginate_collections',
    # Statistics
    'summarize_collections',
    # Exceptions
    'CollectionsServiceError',
    'CollectionValidationError',
    'DuplicateCollectionError',
    'CollectionNotFoundError',
    'MalformedCollectionInputError',
]
