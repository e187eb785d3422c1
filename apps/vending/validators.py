"""Business rule validators shared by the model (admin forms) and the API."""

from django.core.exceptions import ValidationError
from django.utils import timezone

from .constants import COINS_PER_POSTCARD


FUTURE_DATE_MESSAGE = 'Collection date cannot be in the future'
WHOLE_POSTCARDS_MESSAGE = (
    f'Machine coins must be divisible by {COINS_PER_POSTCARD} '
    f'({COINS_PER_POSTCARD} coins = 1 postcard)'
)


def is_future_date(value, today=None) -> bool:
    """True when the date is after today's local date."""
    return value > (today or timezone.localdate())


def is_whole_postcards(machine_coins) -> bool:
    return machine_coins % COINS_PER_POSTCARD == 0


def validate_not_future(value):
    if is_future_date(value):
        raise ValidationError(FUTURE_DATE_MESSAGE, code='future_date')


def validate_whole_postcards(value):
    if not is_whole_postcards(value):
        raise ValidationError(WHOLE_POSTCARDS_MESSAGE, code='not_divisible')
