# ==========================================
# apps/vending/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Collection
from .constants import EXPECTED_EXCHANGE_TOTAL


@admin.register(Collection)
class CollectionAdmin(admin.ModelAdmin):
    """
    Admin interface for Collections.

    Provides collection management including:
    - Listing with computed revenue, profit and float status
    - Filtering by round, week and date
    - Search by location and notes
    """

    list_display = [
        'machine_location',
        'collection_date',
        'round_number',
        'week_number',
        'machine_coins_10baht',
        'get_revenue',
        'get_profit',
        'exchange_status_badge',
        'created_by',
    ]

    list_filter = [
        'round_number',
        'week_number',
        'collection_date',
    ]

    search_fields = [
        'machine_location',
        'notes',
        'created_by__email',
    ]

    readonly_fields = [
        'created_by',
        'created_at',
        'updated_at',
    ]

    date_hierarchy = 'collection_date'
    ordering = ['-collection_date', '-created_at']

    fieldsets = (
        ('Collection', {
            'fields': (
                'collection_date',
                'round_number',
                'week_number',
                'machine_location',
            )
        }),
        ('Machine', {
            'fields': ('machine_coins_10baht',)
        }),
        ('Exchange Float', {
            'fields': (
                'exchange_coins_1baht',
                'exchange_coins_2baht',
                'exchange_coins_5baht',
                'exchange_coins_10baht',
                'exchange_note_20baht',
                'exchange_note_50baht',
                'exchange_note_100baht',
                'exchange_note_500baht',
                'exchange_note_1000baht',
            )
        }),
        ('Stock & Cost', {
            'fields': ('postcards_remaining', 'cost_per_postcard')
        }),
        ('Notes', {
            'fields': ('notes',),
            'classes': ('collapse',),
        }),
        ('Metadata', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def get_revenue(self, obj):
        return f"{obj.metrics['revenue']} THB"
    get_revenue.short_description = 'Revenue'

    def get_profit(self, obj):
        return f"{obj.metrics['profit']} THB"
    get_profit.short_description = 'Profit'

    def exchange_status_badge(self, obj):
        """Display float reconciliation status as colored badge."""
        metrics = obj.metrics
        if metrics['exchange_balanced']:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Balanced</span>'
            )
        difference = metrics['exchange_total'] - EXPECTED_EXCHANGE_TOTAL
        return format_html(
            '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{} THB</span>',
            f"{difference:+d}"
        )
    exchange_status_badge.short_description = 'Float'

    def save_model(self, request, obj, form, change):
        if not change and obj.created_by is None:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('created_by')
