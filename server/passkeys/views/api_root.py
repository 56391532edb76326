from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse


@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """
    API root endpoint to make the browsable API navigable.
    """
    return Response(
        {
            "health": reverse("health_check", request=request, format=format),
            "schema": reverse("schema", request=request, format=format),
            "registration_options": reverse("registration_options", request=request),
            "registration_result": reverse("registration_result", request=request),
            "authentication_options": reverse("authentication_options", request=request),
            "authentication_result": reverse("authentication_result", request=request),
            "restricted": reverse("restricted", request=request),
            "session_logout": reverse("session_logout", request=request),
        }
    )
