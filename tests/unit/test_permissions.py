"""
Unit tests for role permission resolution.
"""

from autocrud_engine.auth.permissions import (Permission, expand_permissions,
                                              has_permission,
                                              resolve_role_permissions)

RBAC = {
    "Admin": ["all"],
    "Manager": ["create", "read", "update"],
    "Viewer": ["read"],
    "Everything": ["create", "read", "update", "delete"],
}


class TestExpandPermissions:
    """Test expansion of the ``all`` grant."""

    def test_all_expands_to_crud(self):
        assert expand_permissions(["all"]) == {"create", "read", "update", "delete"}

    def test_all_wins_over_other_grants(self):
        assert expand_permissions(["read", "all"]) == {"create", "read", "update", "delete"}

    def test_plain_grants_unchanged(self):
        assert expand_permissions(["read", "update"]) == {"read", "update"}

    def test_unknown_grants_preserved(self):
        assert expand_permissions(["read", "publish"]) == {"read", "publish"}

    def test_accepts_enum_members(self):
        assert expand_permissions([Permission.READ]) == {"read"}

    def test_empty(self):
        assert expand_permissions([]) == frozenset()


class TestHasPermission:
    """Test the default-deny permission check."""

    def test_granted(self):
        assert has_permission(RBAC, "Manager", "update") is True

    def test_not_granted(self):
        assert has_permission(RBAC, "Viewer", "delete") is False

    def test_all_grant_covers_delete(self):
        assert has_permission(RBAC, "Admin", "delete") is True

    def test_unknown_role_denied(self):
        assert has_permission(RBAC, "Intern", "read") is False

    def test_no_rbac_denies_everyone(self):
        assert has_permission(None, "Manager", "read") is False
        assert has_permission({}, "Manager", "read") is False

    def test_role_names_are_case_sensitive(self):
        assert has_permission(RBAC, "viewer", "read") is False

    def test_asking_for_all(self):
        assert has_permission(RBAC, "Admin", "all") is True
        assert has_permission(RBAC, "Everything", "all") is True
        assert has_permission(RBAC, "Manager", "all") is False

    def test_enum_permission(self):
        assert has_permission(RBAC, "Viewer", Permission.READ) is True


class TestResolveRolePermissions:
    """Test role lookup."""

    def test_resolves_expanded_set(self):
        assert resolve_role_permissions(RBAC, "Admin") == {"create", "read", "update", "delete"}

    def test_missing_role(self):
        assert resolve_role_permissions(RBAC, "Ghost") == frozenset()
