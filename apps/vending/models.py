from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
from .constants import DEFAULT_COST_PER_POSTCARD
from .validators import validate_not_future, validate_whole_postcards


class RoundNumber(models.IntegerChoices):
    FIRST = 1, 'Round 1'
    SECOND = 2, 'Round 2'


class Collection(models.Model):
    """Cash collection from one postcard machine for one round on one day."""

    # Identity (unique together)
    collection_date = models.DateField(validators=[validate_not_future])
    round_number = models.PositiveSmallIntegerField(choices=RoundNumber.choices)
    machine_location = models.CharField(max_length=200)

    # Business week label supplied by the collector
    week_number = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    # Coins found inside the machine (4 coins = 1 postcard)
    machine_coins_10baht = models.PositiveIntegerField(
        default=0,
        validators=[validate_whole_postcards]
    )

    # Exchange float kept beside the machine
    exchange_coins_1baht = models.PositiveIntegerField(default=0)
    exchange_coins_2baht = models.PositiveIntegerField(default=0)
    exchange_coins_5baht = models.PositiveIntegerField(default=0)
    exchange_coins_10baht = models.PositiveIntegerField(default=0)
    exchange_note_20baht = models.PositiveIntegerField(default=0)
    exchange_note_50baht = models.PositiveIntegerField(default=0)
    exchange_note_100baht = models.PositiveIntegerField(default=0)
    exchange_note_500baht = models.PositiveIntegerField(default=0)
    exchange_note_1000baht = models.PositiveIntegerField(default=0)

    # Stock and cost basis
    postcards_remaining = models.PositiveIntegerField()
    cost_per_postcard = models.DecimalField(
        max_digits=6,
        decimal_places=3,
        default=DEFAULT_COST_PER_POSTCARD,
        validators=[
            MinValueValidator(Decimal('1')),
            MaxValueValidator(Decimal('50')),
        ]
    )
    notes = models.TextField(blank=True)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='collections'
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'collections'
        constraints = [
            models.UniqueConstraint(
                fields=['collection_date', 'round_number', 'machine_location'],
                name='unique_collection_date_round_location',
            ),
        ]
        indexes = [
            models.Index(fields=['collection_date'], name='collections_date_idx'),
            models.Index(fields=['week_number'], name='collections_week_idx'),
            models.Index(fields=['machine_location'], name='collections_location_idx'),
        ]
        ordering = ['-collection_date', '-created_at']

    def __str__(self):
        return f"{self.machine_location} - {self.collection_date} (round {self.round_number})"

    @property
    def identity(self):
        """Return the (date, round, location) triple that must be unique."""
        return (self.collection_date, self.round_number, self.machine_location)

    @property
    def metrics(self):
        """Derived financial metrics, recomputed from current field values."""
        from .services.calculations import calculate_collection_metrics
        return calculate_collection_metrics(self)
