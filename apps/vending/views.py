from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import (
    CollectionFilterSerializer,
    CollectionInputSerializer,
    CollectionSerializer,
    CollectionListResponseSerializer,
    CollectionSummarySerializer,
)
from .services import (
    validate_collection_data,
    parse_collection_id,
    create_collection,
    get_collection_by_id,
    update_collection,
    delete_collection,
    list_collections,
    paginate_collections,
    summarize_collections,
    get_current_week_number,
    CollectionValidationError,
    DuplicateCollectionError,
    CollectionNotFoundError,
    MalformedCollectionInputError,
)


# Response serializers for API documentation
class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class ValidationErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    details = drf_serializers.DictField(child=drf_serializers.ListField(child=drf_serializers.CharField()))


class MessageResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()


class CurrentWeekResponseSerializer(drf_serializers.Serializer):
    week_number = drf_serializers.IntegerField()


FILTER_PARAMETERS = [
    OpenApiParameter('location', OpenApiTypes.STR, description='Substring of machine location'),
    OpenApiParameter('week', OpenApiTypes.INT, description='Week number'),
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Collections on or after this date'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='Collections on or before this date'),
]


def _validation_error_response(errors):
    return Response(
        {'error': 'Validation failed', 'details': errors},
        status=status.HTTP_400_BAD_REQUEST
    )


def _error_response(exc, status_code):
    return Response({'error': str(exc)}, status=status_code)


class CollectionViewSet(viewsets.ViewSet):
    """
    ViewSet for Collection CRUD operations.

    list: Get collections (filterable, paginated, newest first)
    create: Record a new collection
    retrieve: Get a specific collection with its metrics
    update / partial_update: Change any subset of fields
    destroy: Delete a collection
    """

    permission_classes = [IsAuthenticated]

    def _filter_params(self, request):
        filter_serializer = CollectionFilterSerializer(data=request.query_params)
        if not filter_serializer.is_valid():
            raise CollectionValidationError(filter_serializer.errors)
        return filter_serializer.validated_data

    @extend_schema(
        parameters=[
            OpenApiParameter('page', OpenApiTypes.INT, description='Page number (default 1)'),
            OpenApiParameter('limit', OpenApiTypes.INT, description='Page size, 1-100 (default 10)'),
            *FILTER_PARAMETERS,
        ],
        responses={200: CollectionListResponseSerializer, 400: ValidationErrorResponseSerializer},
        description="List collections with their metrics, newest first.",
        tags=['collections'],
    )
    def list(self, request):
        try:
            params = self._filter_params(request)
        except CollectionValidationError as e:
            return Response(
                {'error': 'Invalid query parameters', 'details': e.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        queryset = list_collections(
            location=params.get('location'),
            week=params.get('week'),
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
        page = paginate_collections(queryset, page=params['page'], limit=params['limit'])

        return Response({
            'collections': CollectionSerializer(page['collections'], many=True).data,
            'pagination': page['pagination'],
        })

    @extend_schema(
        request=CollectionInputSerializer,
        responses={
            201: CollectionSerializer,
            400: ValidationErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        description="Record a collection. Date, round and location must be unique together.",
        tags=['collections'],
    )
    def create(self, request):
        try:
            data = validate_collection_data(request.data)
            collection = create_collection(created_by=request.user, **data)
        except CollectionValidationError as e:
            return _validation_error_response(e.errors)
        except DuplicateCollectionError as e:
            return _error_response(e, status.HTTP_409_CONFLICT)

        return Response(CollectionSerializer(collection).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        responses={
            200: CollectionSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        description="Get a collection with its metrics.",
        tags=['collections'],
    )
    def retrieve(self, request, pk=None):
        try:
            collection = get_collection_by_id(collection_id=parse_collection_id(pk))
        except MalformedCollectionInputError as e:
            return _error_response(e, status.HTTP_400_BAD_REQUEST)
        except CollectionNotFoundError as e:
            return _error_response(e, status.HTTP_404_NOT_FOUND)

        return Response(CollectionSerializer(collection).data)

    @extend_schema(
        request=CollectionInputSerializer,
        responses={
            200: CollectionSerializer,
            400: ValidationErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        description="Update any subset of a collection's fields.",
        tags=['collections'],
    )
    def update(self, request, pk=None):
        try:
            collection_id = parse_collection_id(pk)
            # 404 takes precedence over payload errors
            get_collection_by_id(collection_id=collection_id)
            changes = validate_collection_data(request.data, partial=True)
            collection = update_collection(collection_id=collection_id, changes=changes)
        except MalformedCollectionInputError as e:
            return _error_response(e, status.HTTP_400_BAD_REQUEST)
        except CollectionNotFoundError as e:
            return _error_response(e, status.HTTP_404_NOT_FOUND)
        except CollectionValidationError as e:
            return _validation_error_response(e.errors)
        except DuplicateCollectionError as e:
            return _error_response(e, status.HTTP_409_CONFLICT)

        return Response(CollectionSerializer(collection).data)

    @extend_schema(
        request=CollectionInputSerializer,
        responses={
            200: CollectionSerializer,
            400: ValidationErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        description="Update any subset of a collection's fields.",
        tags=['collections'],
    )
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(
        responses={
            200: MessageResponseSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        description="Delete a collection permanently.",
        tags=['collections'],
    )
    def destroy(self, request, pk=None):
        try:
            delete_collection(collection_id=parse_collection_id(pk))
        except MalformedCollectionInputError as e:
            return _error_response(e, status.HTTP_400_BAD_REQUEST)
        except CollectionNotFoundError as e:
            return _error_response(e, status.HTTP_404_NOT_FOUND)

        return Response({'message': 'Collection deleted successfully'})

    @extend_schema(
        responses={200: CurrentWeekResponseSerializer},
        description="Current week number, for prefilling the week field.",
        tags=['collections'],
    )
    @action(detail=False, methods=['get'], url_path='current-week')
    def current_week(self, request):
        return Response({'week_number': get_current_week_number()})

    @extend_schema(
        parameters=FILTER_PARAMETERS,
        responses={200: CollectionSummarySerializer, 400: ValidationErrorResponseSerializer},
        description="Totals over the collections matching the filters.",
        tags=['collections'],
    )
    @action(detail=False, methods=['get'])
    def summary(self, request):
        try:
            params = self._filter_params(request)
        except CollectionValidationError as e:
            return Response(
                {'error': 'Invalid query parameters', 'details': e.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        queryset = list_collections(
            location=params.get('location'),
            week=params.get('week'),
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
        summary = summarize_collections(queryset)

        return Response(CollectionSummarySerializer(summary).data)
