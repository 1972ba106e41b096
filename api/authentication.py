from rest_framework.authentication import SessionAuthentication


class StoreSessionAuthentication(SessionAuthentication):
    """
    Session cookie auth that answers anonymous requests with 401 instead of 403.
    """

    def authenticate_header(self, request):
        return 'Session'
