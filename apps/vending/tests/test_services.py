from datetime import date
from decimal import Decimal

import pytest

from apps.vending.models import Collection
from apps.vending.services import (
    parse_collection_id,
    create_collection,
    get_collection_by_id,
    update_collection,
    delete_collection,
    list_collections,
    paginate_collections,
    summarize_collections,
    DuplicateCollectionError,
    CollectionNotFoundError,
    MalformedCollectionInputError,
)


def collection_fields(**overrides):
    fields = {
        'collection_date': date(2024, 3, 15),
        'round_number': 1,
        'week_number': 11,
        'machine_location': 'Central World - Level 2',
        'machine_coins_10baht': 400,
        'exchange_note_1000baht': 12,
        'postcards_remaining': 150,
        'cost_per_postcard': Decimal('13.766'),
    }
    fields.update(overrides)
    return fields


class TestParseCollectionId:

    @pytest.mark.parametrize('raw,expected', [('1', 1), ('42', 42), (7, 7)])
    def test_numeric(self, raw, expected):
        assert parse_collection_id(raw) == expected

    @pytest.mark.parametrize('raw', ['abc', '', None, '1.5', str(10 ** 20)])
    def test_malformed(self, raw):
        with pytest.raises(MalformedCollectionInputError):
            parse_collection_id(raw)


@pytest.mark.django_db
class TestCreateCollection:

    def test_create(self, collector):
        collection = create_collection(created_by=collector, **collection_fields())

        assert collection.id is not None
        assert collection.created_by == collector
        assert Collection.objects.count() == 1

    def test_duplicate_triple_rejected(self, collector):
        create_collection(created_by=collector, **collection_fields())

        with pytest.raises(DuplicateCollectionError) as exc_info:
            create_collection(created_by=collector, **collection_fields(machine_coins_10baht=8))

        assert str(exc_info.value) == 'A collection already exists for this date, round, and location'
        assert Collection.objects.count() == 1

    def test_second_round_same_day_allowed(self, collector):
        create_collection(created_by=collector, **collection_fields(round_number=1))
        create_collection(created_by=collector, **collection_fields(round_number=2))

        assert Collection.objects.count() == 2

    def test_other_location_same_round_allowed(self, collector):
        create_collection(**collection_fields())
        create_collection(**collection_fields(machine_location='Siam Paragon'))

        assert Collection.objects.count() == 2

    def test_location_match_is_exact(self, collector):
        create_collection(**collection_fields(machine_location='Terminal 21'))
        create_collection(**collection_fields(machine_location='terminal 21'))

        assert Collection.objects.count() == 2


@pytest.mark.django_db
class TestGetCollection:

    def test_get(self, collection):
        assert get_collection_by_id(collection_id=collection.id) == collection

    def test_not_found(self):
        with pytest.raises(CollectionNotFoundError):
            get_collection_by_id(collection_id=99999)


@pytest.mark.django_db
class TestUpdateCollection:

    def test_partial_update(self, collection):
        updated = update_collection(
            collection_id=collection.id,
            changes={'machine_coins_10baht': 800, 'notes': 'Busy weekend'},
        )

        assert updated.machine_coins_10baht == 800
        assert updated.notes == 'Busy weekend'
        assert updated.machine_location == collection.machine_location
        assert updated.metrics['revenue'] == 8000

    def test_keeping_own_identity_is_not_duplicate(self, collection):
        updated = update_collection(
            collection_id=collection.id,
            changes={'round_number': collection.round_number, 'notes': 'Same slot'},
        )
        assert updated.notes == 'Same slot'

    def test_move_onto_taken_identity_rejected(self, make_collection):
        make_collection(round_number=1)
        second = make_collection(round_number=2)

        with pytest.raises(DuplicateCollectionError):
            update_collection(collection_id=second.id, changes={'round_number': 1})

        second.refresh_from_db()
        assert second.round_number == 2

    def test_triple_combines_changes_with_existing_values(self, make_collection):
        make_collection(machine_location='Siam Paragon', round_number=2)
        target = make_collection(round_number=2)

        with pytest.raises(DuplicateCollectionError):
            update_collection(collection_id=target.id, changes={'machine_location': 'Siam Paragon'})

    def test_move_to_free_identity(self, make_collection):
        make_collection(round_number=1)
        second = make_collection(round_number=2)

        updated = update_collection(
            collection_id=second.id,
            changes={'collection_date': date(2024, 3, 14), 'round_number': 1},
        )
        assert updated.identity == (date(2024, 3, 14), 1, 'Central World - Level 2')

    def test_not_found(self):
        with pytest.raises(CollectionNotFoundError):
            update_collection(collection_id=99999, changes={'notes': 'x'})


@pytest.mark.django_db
class TestDeleteCollection:

    def test_delete(self, collection):
        delete_collection(collection_id=collection.id)
        assert not Collection.objects.filter(id=collection.id).exists()

    def test_not_found(self):
        with pytest.raises(CollectionNotFoundError):
            delete_collection(collection_id=99999)


@pytest.mark.django_db
class TestListCollections:

    @pytest.fixture
    def collections(self, make_collection):
        return [
            make_collection(collection_date=date(2024, 3, 1), week_number=9, machine_location='Terminal 21'),
            make_collection(collection_date=date(2024, 3, 8), week_number=10, machine_location='Siam Paragon'),
            make_collection(collection_date=date(2024, 3, 15), week_number=11, machine_location='Terminal 21'),
        ]

    def test_newest_first(self, collections):
        dates = [c.collection_date for c in list_collections()]
        assert dates == [date(2024, 3, 15), date(2024, 3, 8), date(2024, 3, 1)]

    def test_location_substring_case_insensitive(self, collections):
        assert list_collections(location='terminal').count() == 2

    def test_week(self, collections):
        assert [c.week_number for c in list_collections(week=10)] == [10]

    def test_date_range_inclusive(self, collections):
        queryset = list_collections(start_date=date(2024, 3, 8), end_date=date(2024, 3, 15))
        assert queryset.count() == 2

    def test_pagination(self, collections):
        page = paginate_collections(list_collections(), page=2, limit=2)

        assert len(page['collections']) == 1
        assert page['collections'][0].collection_date == date(2024, 3, 1)
        assert page['pagination'] == {'page': 2, 'limit': 2, 'total': 3, 'total_pages': 2}

    def test_page_past_end_is_empty(self, collections):
        page = paginate_collections(list_collections(), page=5, limit=10)

        assert page['collections'] == []
        assert page['pagination']['total'] == 3

    def test_no_collections(self, db):
        page = paginate_collections(list_collections(), page=1, limit=10)
        assert page['pagination']['total_pages'] == 0


@pytest.mark.django_db
class TestSummarizeCollections:

    def test_totals(self, make_collection):
        make_collection(round_number=1)
        make_collection(round_number=2, machine_coins_10baht=40, exchange_note_1000baht=11)

        summary = summarize_collections(list_collections())

        assert summary == {
            'count': 2,
            'postcards_sold': 110,
            'machine_total': 4400,
            'revenue': 4400,
            'cost': Decimal('1514.26'),
            'profit': Decimal('2885.74'),
            'unbalanced_count': 1,
        }

    def test_empty(self, db):
        summary = summarize_collections(list_collections())
        assert summary['count'] == 0
        assert summary['cost'] == Decimal('0')
