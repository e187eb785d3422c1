from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Count, Max

from apps.vending.models import Collection
from .models import User


class RecentCollectionInline(admin.TabularInline):
    """Read-only list of collections the user recorded."""

    model = Collection
    fk_name = 'created_by'
    fields = ['collection_date', 'round_number', 'machine_location', 'machine_coins_10baht']
    readonly_fields = fields
    extra = 0
    can_delete = False
    show_change_link = True
    ordering = ['-collection_date']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Collectors and administrators, with how much each has recorded."""

    list_display = [
        'email',
        'display_name',
        'is_staff',
        'is_active',
        'collection_count',
        'last_collection_date',
        'last_login',
    ]
    list_filter = ['is_staff', 'is_active']
    search_fields = ['email', 'display_name']
    ordering = ['email']

    # BaseUserAdmin assumes a username field
    fieldsets = (
        (None, {'fields': ('email', 'display_name', 'password')}),
        ('Access', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Activity', {'fields': ('created_at', 'last_login')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2', 'is_staff'),
        }),
    )
    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = []
    inlines = [RecentCollectionInline]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            _collection_count=Count('collections'),
            _last_collection_date=Max('collections__collection_date'),
        )

    @admin.display(description='Collections', ordering='_collection_count')
    def collection_count(self, obj):
        return obj._collection_count

    @admin.display(description='Last collection', ordering='_last_collection_date')
    def last_collection_date(self, obj):
        return obj._last_collection_date
