# apps/hierarchy/converters.py

from django.urls import register_converter

from .roles import Role, DRILLDOWN_ROLES


class RoleConverter:
    """Matches one of the five role slugs"""

    regex = '|'.join(Role.values)

    def to_python(self, value):
        return Role(value)

    def to_url(self, value):
        return Role(value).value


class DrilldownRoleConverter(RoleConverter):
    """Matches only the roles that can be drilled into from the browser"""

    regex = '|'.join(role.value for role in DRILLDOWN_ROLES)


register_converter(RoleConverter, 'role')
register_converter(DrilldownRoleConverter, 'drilldown_role')
