"""Collection validation service - storage-independent record checks."""

from datetime import date
from typing import Optional

from .exceptions import CollectionValidationError


def validate_collection_data(
    data,
    *,
    partial: bool = False,
    today: Optional[date] = None
) -> dict:
    """
    Validate a candidate collection record.

    Args:
        data: Raw input mapping (e.g. parsed request body)
        partial: Validate only the submitted fields (updates)
        today: Reference date for the future-date check

    Returns:
        Dict of cleaned values. For creates, omitted exchange counts are 0
        and an omitted cost is the default cost per postcard.

    Raises:
        CollectionValidationError: With a field -> messages mapping
    """
    from apps.vending.serializers import CollectionInputSerializer

    context = {'today': today} if today else {}
    serializer = CollectionInputSerializer(data=data, partial=partial, context=context)

    if not serializer.is_valid():
        raise CollectionValidationError({
            field: [str(message) for message in messages]
            for field, messages in serializer.errors.items()
        })

    return dict(serializer.validated_data)
