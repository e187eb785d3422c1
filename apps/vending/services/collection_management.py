"""Collection management service - CRUD operations for collections."""

import logging
import math
from datetime import date
from typing import Optional

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.vending.constants import MAX_COLLECTION_ID
from apps.vending.models import Collection
from .exceptions import (
    CollectionNotFoundError,
    DuplicateCollectionError,
    MalformedCollectionInputError,
)

logger = logging.getLogger(__name__)

IDENTITY_FIELDS = ('collection_date', 'round_number', 'machine_location')

DUPLICATE_MESSAGE = "A collection already exists for this date, round, and location"


def parse_collection_id(raw_id) -> int:
    """
    Convert a path/query identifier to a collection ID.

    Raises:
        MalformedCollectionInputError: If the value is not a whole number
            or is too large to be a stored ID
    """
    try:
        collection_id = int(str(raw_id))
    except (TypeError, ValueError):
        raise MalformedCollectionInputError("Invalid collection ID")

    if abs(collection_id) > MAX_COLLECTION_ID:
        raise MalformedCollectionInputError("Invalid collection ID")
    return collection_id


def find_duplicate_collection(
    *,
    collection_date: date,
    round_number: int,
    machine_location: str,
    exclude_id: Optional[int] = None
) -> Optional[Collection]:
    """
    Return the collection holding this identity triple, if any.

    Args:
        collection_date: Collection date
        round_number: Round (1 or 2)
        machine_location: Exact machine location
        exclude_id: Collection to ignore (the one being updated)
    """
    queryset = Collection.objects.filter(
        collection_date=collection_date,
        round_number=round_number,
        machine_location=machine_location,
    )
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.first()


@transaction.atomic
def create_collection(*, created_by: Optional[User] = None, **fields) -> Collection:
    """
    Create a collection from already validated fields.

    Args:
        created_by: User recording the collection
        **fields: Cleaned collection fields (see validate_collection_data)

    Returns:
        Created Collection instance

    Raises:
        DuplicateCollectionError: If the (date, round, location) triple exists
    """
    duplicate = find_duplicate_collection(
        collection_date=fields['collection_date'],
        round_number=fields['round_number'],
        machine_location=fields['machine_location'],
    )
    if duplicate:
        logger.warning(
            "Rejected duplicate collection %s round %s at %s",
            fields['collection_date'], fields['round_number'], fields['machine_location'],
        )
        raise DuplicateCollectionError(DUPLICATE_MESSAGE)

    try:
        # Savepoint keeps the outer transaction usable if the constraint fires
        with transaction.atomic():
            collection = Collection.objects.create(created_by=created_by, **fields)
    except IntegrityError:
        # Unique constraint caught a concurrent create for the same triple
        raise DuplicateCollectionError(DUPLICATE_MESSAGE)

    logger.info("Created collection %s (%s)", collection.id, collection)
    return collection


def get_collection_by_id(*, collection_id: int) -> Collection:
    """
    Get collection by ID.

    Raises:
        CollectionNotFoundError: If collection doesn't exist
    """
    try:
        return Collection.objects.select_related('created_by').get(id=collection_id)
    except Collection.DoesNotExist:
        raise CollectionNotFoundError("Collection not found")


@transaction.atomic
def update_collection(*, collection_id: int, changes: dict) -> Collection:
    """
    Apply a partial update to a collection.

    When any identity field changes, the prospective triple is built from
    the changed values plus the current values of the untouched fields and
    checked against every other collection.

    Args:
        collection_id: Collection to update
        changes: Validated subset of collection fields

    Returns:
        Updated Collection instance

    Raises:
        CollectionNotFoundError: If collection doesn't exist
        DuplicateCollectionError: If the new triple belongs to another collection
    """
    try:
        collection = Collection.objects.select_for_update().get(id=collection_id)
    except Collection.DoesNotExist:
        raise CollectionNotFoundError("Collection not found")

    if any(field in changes for field in IDENTITY_FIELDS):
        prospective = {
            field: changes.get(field, getattr(collection, field))
            for field in IDENTITY_FIELDS
        }
        if find_duplicate_collection(exclude_id=collection.id, **prospective):
            logger.warning(
                "Rejected update of collection %s: identity %s already taken",
                collection.id, tuple(prospective.values()),
            )
            raise DuplicateCollectionError(DUPLICATE_MESSAGE)

    for field, value in changes.items():
        setattr(collection, field, value)

    try:
        with transaction.atomic():
            collection.save()
    except IntegrityError:
        raise DuplicateCollectionError(DUPLICATE_MESSAGE)

    logger.info("Updated collection %s fields %s", collection.id, sorted(changes))
    return collection


@transaction.atomic
def delete_collection(*, collection_id: int) -> None:
    """
    Delete a collection permanently.

    Raises:
        CollectionNotFoundError: If collection doesn't exist
    """
    deleted, _ = Collection.objects.filter(id=collection_id).delete()
    if not deleted:
        raise CollectionNotFoundError("Collection not found")

    logger.info("Deleted collection %s", collection_id)


def list_collections(
    *,
    location: Optional[str] = None,
    week: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> QuerySet:
    """
    Get collections matching the filters, newest first.

    Args:
        location: Case-insensitive substring of machine location
        week: Exact week number
        start_date: Inclusive lower bound on collection date
        end_date: Inclusive upper bound on collection date

    Returns:
        QuerySet of Collection
    """
    queryset = Collection.objects.select_related('created_by')

    if location:
        queryset = queryset.filter(machine_location__icontains=location)
    if week:
        queryset = queryset.filter(week_number=week)
    if start_date:
        queryset = queryset.filter(collection_date__gte=start_date)
    if end_date:
        queryset = queryset.filter(collection_date__lte=end_date)

    return queryset.order_by('-collection_date', '-created_at')


def paginate_collections(queryset: QuerySet, *, page: int, limit: int) -> dict:
    """
    Slice a collection queryset into one page.

    Pages past the end are empty rather than an error.

    Returns:
        Dict with 'collections' (list) and 'pagination' metadata
    """
    total = queryset.count()
    offset = (page - 1) * limit

    return {
        'collections': list(queryset[offset:offset + limit]),
        'pagination': {
            'page': page,
            'limit': limit,
            'total': total,
            'total_pages': math.ceil(total / limit),
        },
    }
