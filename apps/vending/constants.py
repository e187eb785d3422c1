"""Business constants for postcard machines. Amounts are in baht."""

from decimal import Decimal


POSTCARD_PRICE = 40
COINS_PER_POSTCARD = 4
MACHINE_COIN_VALUE = 10

# The float beside each machine is reset to this total at every visit
EXPECTED_EXCHANGE_TOTAL = 12000

DEFAULT_COST_PER_POSTCARD = Decimal('13.766')

# (field name, face value)
EXCHANGE_DENOMINATIONS = (
    ('exchange_coins_1baht', 1),
    ('exchange_coins_2baht', 2),
    ('exchange_coins_5baht', 5),
    ('exchange_coins_10baht', 10),
    ('exchange_note_20baht', 20),
    ('exchange_note_50baht', 50),
    ('exchange_note_100baht', 100),
    ('exchange_note_500baht', 500),
    ('exchange_note_1000baht', 1000),
)

# Largest value a PositiveIntegerField column holds on every backend
MAX_COUNT = 2147483647

# Largest BigAutoField primary key
MAX_COLLECTION_ID = 9223372036854775807
