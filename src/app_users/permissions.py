"""
DRF permissions based on the user role.

- admin: full access, including reference data (normuren, correctiefactoren)
- medewerker: may calculate and register, may not change reference data
- viewer: read-only
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission


class IsBeheerder(BasePermission):
    """Only administrators (rol=admin or superuser)."""

    message = "Alleen beheerders mogen deze gegevens wijzigen."

    def has_permission(self, request, view) -> bool:
        user = request.user
        return bool(user and user.is_authenticated and user.is_beheerder)


class IsBeheerderOrReadOnly(BasePermission):
    """Read access for every authenticated user, writes for administrators."""

    message = "Alleen beheerders mogen deze gegevens wijzigen."

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return user.is_beheerder


class IsNotViewer(BasePermission):
    """Blocks writes for viewer accounts."""

    message = "Dit account heeft alleen leesrechten."

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return not user.is_viewer
