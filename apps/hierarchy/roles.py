# apps/hierarchy/roles.py
"""
The closed set of agent roles and the static lookup that ties each role to
its model, form and display text.
"""

from django.db import models

from .models import Coordinator, Supervisor, GroupLeader, Pro, Customer
from .forms import CoordinatorForm, SupervisorForm, GroupLeaderForm, ProForm, CustomerForm


class Role(models.TextChoices):
    COORDINATOR = 'coordinator', 'Coordinator'
    SUPERVISOR = 'supervisor', 'Supervisor'
    GROUP_LEADER = 'group_leader', 'Group Leader'
    PRO = 'pro', 'PRO'
    CUSTOMER = 'customer', 'Customer'


class RoleSpec:
    """Everything the views need to know about one role"""

    def __init__(self, role, model, form_class, plural, description,
                 count_field=None, drilldown=False, names_shown=False):
        self.role = role
        self.model = model
        self.form_class = form_class
        self.label = role.label
        self.plural = plural
        self.description = description
        self.count_field = count_field
        self.drilldown = drilldown
        self.names_shown = names_shown

    @property
    def noun(self):
        """Label as used mid-sentence: 'group leader', but 'PRO'"""
        return self.label if self.label.isupper() else self.label.lower()

    @property
    def counted(self):
        return self.count_field is not None

    def __repr__(self):
        return f"<RoleSpec {self.role.value}>"


ROLE_REGISTRY = {
    Role.COORDINATOR: RoleSpec(
        Role.COORDINATOR, Coordinator, CoordinatorForm,
        plural='Coordinators',
        description='Manage ward coordinators with ratings',
        count_field='coordinator_count',
        names_shown=True,
    ),
    Role.SUPERVISOR: RoleSpec(
        Role.SUPERVISOR, Supervisor, SupervisorForm,
        plural='Supervisors',
        description='Assign supervisors to multiple wards',
        count_field='supervisor_count',
        drilldown=True,
        names_shown=True,
    ),
    Role.GROUP_LEADER: RoleSpec(
        Role.GROUP_LEADER, GroupLeader, GroupLeaderForm,
        plural='Group Leaders',
        description='One group leader per ward',
        count_field='group_leader_count',
        drilldown=True,
    ),
    Role.PRO: RoleSpec(
        Role.PRO, Pro, ProForm,
        plural='PROs',
        description='Public Relations Officers under group leaders',
        count_field='pro_count',
    ),
    Role.CUSTOMER: RoleSpec(
        Role.CUSTOMER, Customer, CustomerForm,
        plural='Customers',
        description='Manage customer counts with PRO assignment',
    ),
}

COUNTED_ROLES = tuple(role for role, spec in ROLE_REGISTRY.items() if spec.counted)
DRILLDOWN_ROLES = tuple(role for role, spec in ROLE_REGISTRY.items() if spec.drilldown)


def get_role_spec(role):
    """Look up a role by enum member or slug; raises ValueError for unknown slugs"""
    return ROLE_REGISTRY[Role(role)]


def role_for_model(model):
    for spec in ROLE_REGISTRY.values():
        if spec.model is model:
            return spec.role
    return None
