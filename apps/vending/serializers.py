from decimal import Decimal, ROUND_HALF_UP

from rest_framework import serializers

from apps.accounts.models import User
from .constants import DEFAULT_COST_PER_POSTCARD, MAX_COUNT
from .models import Collection
from .services.calculations import calculate_collection_metrics
from .validators import (
    FUTURE_DATE_MESSAGE,
    WHOLE_POSTCARDS_MESSAGE,
    is_future_date,
    is_whole_postcards,
)


# =============================================================================
# Input Serializers
# =============================================================================

class CollectionFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for collection listing.

    Query Parameters:
        page (int): Page number, starting at 1
        limit (int): Page size, 1-100
        location (str): Case-insensitive substring of machine location
        week (int): Exact week number
        start_date (date): Collections on or after this date
        end_date (date): Collections on or before this date
    """

    page = serializers.IntegerField(min_value=1, max_value=MAX_COUNT, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=10)
    location = serializers.CharField(required=False, allow_blank=True)
    week = serializers.IntegerField(min_value=1, max_value=MAX_COUNT, required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')

        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({
                'end_date': 'End date must be after start date'
            })

        return attrs


def _count_field(label, **kwargs):
    return serializers.IntegerField(
        min_value=0,
        max_value=MAX_COUNT,
        error_messages={
            'min_value': f'{label} cannot be negative',
            'max_value': f'{label} cannot exceed {MAX_COUNT}',
        },
        **kwargs,
    )


class RoundedDecimalField(serializers.DecimalField):
    """DecimalField that rounds surplus decimal places instead of rejecting them."""

    def validate_precision(self, value):
        if value.adjusted() >= self.max_whole_digits:
            self.fail('max_whole_digits', max_whole_digits=self.max_whole_digits)
        rounded = value.quantize(Decimal(1).scaleb(-self.decimal_places), rounding=self.rounding)
        return super().validate_precision(rounded)


class CollectionInputSerializer(serializers.Serializer):
    """
    Validate a candidate collection record.

    Checks run in three stages and stop at the first stage that fails, so a
    response lists every problem of that stage at once:

    1. Per-field types and ranges.
    2. Collection date is not in the future.
    3. Machine coins are a whole number of postcards.

    With ``partial=True`` only the submitted fields are checked and no
    defaults are filled in.

    Context:
        today (date, optional): Reference date for the future-date check.
            Defaults to the local date of TIME_ZONE.
    """

    collection_date = serializers.DateField()
    round_number = serializers.IntegerField(
        min_value=1,
        max_value=2,
        error_messages={
            'min_value': 'Round number must be 1 or 2',
            'max_value': 'Round number must be 1 or 2',
        },
    )
    week_number = serializers.IntegerField(
        min_value=1,
        max_value=MAX_COUNT,
        error_messages={
            'min_value': 'Week number must be at least 1',
            'max_value': f'Week number cannot exceed {MAX_COUNT}',
        },
    )
    machine_location = serializers.CharField(
        min_length=3,
        trim_whitespace=False,
        max_length=200,
        error_messages={
            'min_length': 'Machine location must be at least 3 characters',
            'max_length': 'Machine location must be at most 200 characters',
        },
    )

    machine_coins_10baht = _count_field('Machine coins')

    exchange_coins_1baht = _count_field('1 baht coins', default=0)
    exchange_coins_2baht = _count_field('2 baht coins', default=0)
    exchange_coins_5baht = _count_field('5 baht coins', default=0)
    exchange_coins_10baht = _count_field('10 baht coins', default=0)
    exchange_note_20baht = _count_field('20 baht notes', default=0)
    exchange_note_50baht = _count_field('50 baht notes', default=0)
    exchange_note_100baht = _count_field('100 baht notes', default=0)
    exchange_note_500baht = _count_field('500 baht notes', default=0)
    exchange_note_1000baht = _count_field('1000 baht notes', default=0)

    postcards_remaining = _count_field('Postcards remaining')
    cost_per_postcard = RoundedDecimalField(
        max_digits=6,
        decimal_places=3,
        rounding=ROUND_HALF_UP,
        min_value=Decimal('1'),
        max_value=Decimal('50'),
        default=DEFAULT_COST_PER_POSTCARD,
    )
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        """Run the date check, then the coin divisibility check."""
        collection_date = attrs.get('collection_date')
        if collection_date is not None:
            if is_future_date(collection_date, today=self.context.get('today')):
                raise serializers.ValidationError({
                    'collection_date': FUTURE_DATE_MESSAGE
                })

        machine_coins = attrs.get('machine_coins_10baht')
        if machine_coins is not None and not is_whole_postcards(machine_coins):
            raise serializers.ValidationError({
                'machine_coins_10baht': WHOLE_POSTCARDS_MESSAGE
            })

        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class CollectionCalculationsSerializer(serializers.Serializer):
    """Derived metrics of a collection."""

    machine_total = serializers.IntegerField()
    exchange_total = serializers.IntegerField()
    postcards_sold = serializers.IntegerField()
    revenue = serializers.IntegerField()
    cost = serializers.DecimalField(max_digits=12, decimal_places=3)
    profit = serializers.DecimalField(max_digits=12, decimal_places=3)
    exchange_balanced = serializers.BooleanField()


class CollectionSerializer(serializers.ModelSerializer):
    """Collection record with its metrics merged in."""

    created_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Collection
        fields = [
            'id',
            'collection_date',
            'round_number',
            'week_number',
            'machine_location',
            'machine_coins_10baht',
            'exchange_coins_1baht',
            'exchange_coins_2baht',
            'exchange_coins_5baht',
            'exchange_coins_10baht',
            'exchange_note_20baht',
            'exchange_note_50baht',
            'exchange_note_100baht',
            'exchange_note_500baht',
            'exchange_note_1000baht',
            'postcards_remaining',
            'cost_per_postcard',
            'notes',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        metrics = calculate_collection_metrics(instance)
        data.update(CollectionCalculationsSerializer(metrics).data)
        return data


class PaginationSerializer(serializers.Serializer):
    """Page metadata for list responses."""

    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    total = serializers.IntegerField()
    total_pages = serializers.IntegerField()


class CollectionListResponseSerializer(serializers.Serializer):
    """Paginated collection list."""

    collections = CollectionSerializer(many=True)
    pagination = PaginationSerializer()


class CollectionSummarySerializer(serializers.Serializer):
    """Aggregated metrics over a set of collections."""

    count = serializers.IntegerField()
    postcards_sold = serializers.IntegerField()
    machine_total = serializers.IntegerField()
    revenue = serializers.IntegerField()
    cost = serializers.DecimalField(max_digits=14, decimal_places=3)
    profit = serializers.DecimalField(max_digits=14, decimal_places=3)
    unbalanced_count = serializers.IntegerField()
