# Generated manually for vending app

from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import migrations, models
import django.db.models.deletion
import apps.vending.validators


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Collection',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('collection_date', models.DateField(validators=[apps.vending.validators.validate_not_future])),
                ('round_number', models.PositiveSmallIntegerField(choices=[(1, 'Round 1'), (2, 'Round 2')])),
                ('machine_location', models.CharField(max_length=200)),
                ('week_number', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('machine_coins_10baht', models.PositiveIntegerField(default=0, validators=[apps.vending.validators.validate_whole_postcards])),
                ('exchange_coins_1baht', models.PositiveIntegerField(default=0)),
                ('exchange_coins_2baht', models.PositiveIntegerField(default=0)),
                ('exchange_coins_5baht', models.PositiveIntegerField(default=0)),
                ('exchange_coins_10baht', models.PositiveIntegerField(default=0)),
                ('exchange_note_20baht', models.PositiveIntegerField(default=0)),
                ('exchange_note_50baht', models.PositiveIntegerField(default=0)),
                ('exchange_note_100baht', models.PositiveIntegerField(default=0)),
                ('exchange_note_500baht', models.PositiveIntegerField(default=0)),
                ('exchange_note_1000baht', models.PositiveIntegerField(default=0)),
                ('postcards_remaining', models.PositiveIntegerField()),
                ('cost_per_postcard', models.DecimalField(decimal_places=3, default=Decimal('13.766'), max_digits=6, validators=[MinValueValidator(Decimal('1')), MaxValueValidator(Decimal('50'))])),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='collections', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'collections',
                'ordering': ['-collection_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['collection_date'], name='collections_date_idx'),
                    models.Index(fields=['week_number'], name='collections_week_idx'),
                    models.Index(fields=['machine_location'], name='collections_location_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('collection_date', 'round_number', 'machine_location'), name='unique_collection_date_round_location'),
                ],
            },
        ),
    ]
