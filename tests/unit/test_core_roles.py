import pytest

from userapi.core import roles
from userapi.core.errors import InvalidRoleError
from userapi.core.models import Role


class TestIsValidRoleName:
    @pytest.mark.parametrize("name", ["Viewer", "Editor", "Admin"])
    def test_vocabulary_names_are_valid(self, name):
        assert roles.is_valid_role_name(name) is True

    @pytest.mark.parametrize("name", ["", "viewer", "ADMIN", "Wizard", None, 3])
    def test_other_values_are_invalid(self, name):
        assert roles.is_valid_role_name(name) is False

    def test_super_admin_is_not_constructible(self):
        """SuperAdmin is advertised in messages but rejected on construction."""
        assert roles.is_valid_role_name("SuperAdmin") is False
        with pytest.raises(InvalidRoleError):
            roles.explicate_roles(["SuperAdmin"])
        assert "'SuperAdmin'" in roles.invalid_role_message("Wizard")


class TestExplicateRoles:
    def test_preserves_order_and_length(self):
        names = ["Admin", "Viewer", "Editor", "Viewer"]
        result = roles.explicate_roles(names)
        assert len(result) == len(names)
        assert [role.name for role in result] == names
        assert all(isinstance(role, Role) for role in result)

    def test_empty_input_gives_empty_output(self):
        assert roles.explicate_roles([]) == []

    def test_reports_first_unknown_name(self):
        with pytest.raises(InvalidRoleError) as exc:
            roles.explicate_roles(["Viewer", "Wizard", "Sorcerer"])
        assert exc.value.role == "Wizard"
        assert exc.value.status == 400
        assert exc.value.message == (
            "Unknown role Wizard. Valid roles are 'Viewer', 'Editor', 'Admin', and 'SuperAdmin'"
        )

    def test_role_from_name_returns_equal_records(self):
        assert roles.role_from_name("Editor") == Role(name="Editor")
