from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .serializers import UserLoginSerializer, UserSerializer, LogoutRequestSerializer
from .services import authenticate_user, InvalidCredentialsError, InactiveAccountError


class LoginResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    access = serializers.CharField()
    refresh = serializers.CharField()


class DetailResponseSerializer(serializers.Serializer):
    error = serializers.CharField(required=False)
    message = serializers.CharField(required=False)


def _session_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'user': UserSerializer(user).data,
        'access': str(refresh.access_token),
        'refresh': str(refresh),
    }


@extend_schema(
    request=UserLoginSerializer,
    responses={200: LoginResponseSerializer, 400: DetailResponseSerializer,
               401: DetailResponseSerializer, 403: DetailResponseSerializer},
    description="Exchange collector email and password for a JWT pair.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    serializer = UserLoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {'error': 'Validation failed', 'details': serializer.errors},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(_session_for(user))


@extend_schema(
    request=LogoutRequestSerializer,
    responses={200: DetailResponseSerializer, 400: DetailResponseSerializer},
    description="End the session. Tokens are stateless, so the client drops them; "
                "a refresh token, if sent, must still be well formed.",
    tags=['auth'],
)
@api_view(['POST'])
def logout(request):
    refresh_token = request.data.get('refresh')
    if refresh_token:
        try:
            RefreshToken(refresh_token)
        except TokenError:
            return Response({'error': 'Invalid token'}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'message': 'Logged out'})


@extend_schema(
    responses={200: UserSerializer},
    description="The collector the bearer token belongs to.",
    tags=['auth'],
)
@api_view(['GET'])
def current_user(request):
    return Response(UserSerializer(request.user).data)
