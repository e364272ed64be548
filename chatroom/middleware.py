import logging

import jwt
from django.http import JsonResponse

from chatroom.jwt_utils import validate_jwt_token

logger = logging.getLogger(__name__)


class JWTUserMiddleware:
    def __init__(self, get_response):
        """
        Store the next request callable and the path prefixes that skip token parsing.

        A request that carries no Authorization header passes through anonymously
        with ``request.user_id = None``; the polling endpoints identify users by the
        ids in their bodies and fall back to ``request.user_id`` when those are absent.
        """
        self.get_response = get_response
        self.exempt_urls = [
            '/ping/',
            '/admin/',
            '/static/',
        ]

    def __call__(self, request):
        request.user_id = None

        if self._is_exempt_url(request.path):
            return self.get_response(request)

        auth_header = request.META.get('HTTP_AUTHORIZATION', '')
        if not auth_header:
            return self.get_response(request)

        parts = auth_header.split(' ')
        if len(parts) != 2 or parts[0] != 'Bearer' or not parts[1]:
            return JsonResponse({'error': 'Missing or invalid Authorization headers'}, status=401)

        try:
            payload = validate_jwt_token(parts[1])
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected bearer token on {request.path}: {e}")
            return JsonResponse({'error': str(e)}, status=401)

        request.user_id = payload.get('sub')
        return self.get_response(request)

    def _is_exempt_url(self, path):
        """Check if the URL path is exempt from token parsing"""
        for exempt_url in self.exempt_urls:
            if path.startswith(exempt_url):
                return True
        return False


def get_acting_user_id(request, supplied=None):
    """
    Resolve the id of the user a request acts for.

    An explicitly supplied id (body or query) wins; otherwise the token subject.
    """
    if supplied not in (None, ''):
        return str(supplied)
    return getattr(request, 'user_id', None)
