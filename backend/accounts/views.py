from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from common.utils.responses import error_response
from services import identity
from services.identity import DuplicatePhoneError

from .serializers import RegisterSerializer, LoginSerializer, UserSerializer


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


class RegisterView(APIView):
    """
    Register a new rider or driver

    POST Body:
    {
        "name": "Alice",
        "phone_number": "1111111111",
        "role": "rider"  // or "driver"
    }
    """
    permission_classes = (AllowAny,)
    authentication_classes = []

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = identity.register(
                name=serializer.validated_data['name'],
                phone=serializer.validated_data['phone_number'],
                role=serializer.validated_data['role'],
            )
        except DuplicatePhoneError as exc:
            return error_response(exc)

        return Response({
            'message': 'User registered successfully',
            'user': UserSerializer(user).data,
            'tokens': _tokens_for(user),
        }, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    Login with a registered phone number to get JWT tokens

    POST Body:
    {
        "phone_number": "1111111111"
    }
    """
    permission_classes = (AllowAny,)
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = identity.find_by_phone(serializer.validated_data['phone_number'])
        if user is None or not user.is_active:
            return Response(
                {'success': False, 'error': 'invalid_credentials', 'message': 'Invalid credentials.'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        return Response({
            'message': 'Login successful',
            'user': UserSerializer(user).data,
            'tokens': _tokens_for(user),
        })


class RefreshTokenView(APIView):
    """
    Refresh JWT access token

    POST Body:
    {
        "refresh": "your_refresh_token"
    }
    """
    permission_classes = (AllowAny,)
    authentication_classes = []

    def post(self, request):
        refresh_token = request.data.get('refresh')

        if not refresh_token:
            return Response(
                {'success': False, 'error': 'refresh_required', 'message': 'Refresh token is required'},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            refresh = RefreshToken(refresh_token)
        except TokenError:
            return Response(
                {'success': False, 'error': 'invalid_refresh_token', 'message': 'Invalid refresh token'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        return Response({'access': str(refresh.access_token)})


class MeView(APIView):
    """GET: The authenticated user's profile."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)
