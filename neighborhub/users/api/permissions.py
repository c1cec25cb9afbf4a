from rest_framework.permissions import SAFE_METHODS
from rest_framework.permissions import BasePermission


def _authenticated(request) -> bool:
    u = getattr(request, "user", None)
    return bool(u and getattr(u, "is_authenticated", False))


class IsAdminRole(BasePermission):
    """Allow access only to users with the admin role (or superusers)."""

    message = "Access denied. Admin role required."

    def has_permission(self, request, view):
        return _authenticated(request) and request.user.is_admin_role


class IsModeratorOrAdmin(BasePermission):
    message = "Access denied. Moderator or admin role required."

    def has_permission(self, request, view):
        return _authenticated(request) and request.user.is_moderator_or_admin


class IsVerified(BasePermission):
    """Posting requires a verified account unless the neighborhood waives it."""

    message = "Account verification required for this action."

    def has_permission(self, request, view):
        if not _authenticated(request):
            return False
        user = request.user
        if user.is_verified:
            return True
        neighborhood = user.neighborhood
        return neighborhood is not None and not neighborhood.require_verification


class HasNeighborhood(BasePermission):
    message = "You must belong to a neighborhood to use this resource."

    def has_permission(self, request, view):
        return _authenticated(request) and request.user.neighborhood_id is not None


class IsSameNeighborhood(BasePermission):
    """Object-level check: the object belongs to the caller's neighborhood."""

    message = "Access denied"

    def has_object_permission(self, request, view, obj):
        return obj.neighborhood_id == request.user.neighborhood_id


class IsOwnerOrModerator(BasePermission):
    """Writes are limited to the owner or a moderator/admin.

    Views name the owner attribute through ``owner_field`` (defaults to
    ``author``).
    """

    message = "Not authorized to modify this resource."

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        owner_field = getattr(view, "owner_field", "author")
        if getattr(obj, f"{owner_field}_id") == request.user.pk:
            return True
        return request.user.is_moderator_or_admin


class IsOwnerOrAdmin(BasePermission):
    message = "Not authorized to delete this resource."

    def has_object_permission(self, request, view, obj):
        owner_field = getattr(view, "owner_field", "author")
        if getattr(obj, f"{owner_field}_id") == request.user.pk:
            return True
        return request.user.is_admin_role


class IsOwner(BasePermission):
    message = "Only the owner can perform this action."

    def has_object_permission(self, request, view, obj):
        owner_field = getattr(view, "owner_field", "author")
        return getattr(obj, f"{owner_field}_id") == request.user.pk
