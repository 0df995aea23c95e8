from django.core.exceptions import ValidationError

from ..models import User
from ..models.users import UserRole


def get_user_from_request(request):
    user_id = request.headers.get("X-User-Id")
    if not user_id:
        return None
    try:
        return User.objects.get(pk=user_id, is_active=True)
    except (User.DoesNotExist, ValidationError, ValueError):
        return None


def _require_roles(request, roles, forbidden_message):
    user = get_user_from_request(request)
    if not user:
        return None, {"error": "Authentication required", "code": "UNAUTHORIZED", "status": 401}
    if user.role not in roles:
        return None, {"error": forbidden_message, "code": "FORBIDDEN", "status": 403}
    return user, None


def require_editor(request):
    """Returns (user, None) for editors and admins, else (None, error dict)."""
    return _require_roles(request, UserRole.EDITOR_ROLES, "Editor access required")


def require_admin(request):
    return _require_roles(request, UserRole.ADMIN_ROLES, "Admin access required")
