# apps/hierarchy/backends.py
"""
Data access for the hierarchy.

Views never touch the ORM for hierarchy data directly; they go through
HierarchyService, which wraps whichever HierarchyBackend is named in
settings.HIERARCHY['BACKEND']. Tests swap in a fake backend the same way.
"""

from abc import ABC, abstractmethod

from django.db.models import Count

from .models import Panchayath
from .roles import ROLE_REGISTRY, COUNTED_ROLES, get_role_spec


class HierarchyBackendError(Exception):
    """The backend could not complete a request"""


class HierarchyBackend(ABC):
    """Request/response contract for units and agents. Every call is a single round trip."""

    @abstractmethod
    def list_units(self):
        """All units, each carrying coordinator/supervisor/group_leader/pro counts"""

    @abstractmethod
    def get_unit(self, unit_id):
        """The unit with its counts, or None"""

    @abstractmethod
    def list_agents(self, role, unit_id=None):
        """Agents of ``role`` in the unit (every unit when ``unit_id`` is None), by name"""

    @abstractmethod
    def get_agent(self, role, agent_id):
        """The agent, or None"""

    @abstractmethod
    def create_unit(self, data):
        pass

    @abstractmethod
    def update_unit(self, unit, data):
        pass

    @abstractmethod
    def delete_unit(self, unit):
        pass

    @abstractmethod
    def create_agent(self, role, data):
        pass

    @abstractmethod
    def update_agent(self, role, agent, data):
        pass

    @abstractmethod
    def delete_agent(self, role, agent):
        pass


def annotate_unit_counts(queryset):
    """Add one ``<role>_count`` annotation per counted role"""
    annotations = {}
    for role in COUNTED_ROLES:
        spec = ROLE_REGISTRY[role]
        related = spec.model._meta.get_field('panchayath').related_query_name()
        annotations[spec.count_field] = Count(related, distinct=True)
    return queryset.annotate(**annotations)


class DjangoHierarchyBackend(HierarchyBackend):
    """Backend over the project database"""

    def list_units(self):
        return list(annotate_unit_counts(Panchayath.objects.all()).order_by('name'))

    def get_unit(self, unit_id):
        return annotate_unit_counts(Panchayath.objects.filter(pk=unit_id)).first()

    def list_agents(self, role, unit_id=None):
        spec = get_role_spec(role)
        agents = spec.model.objects.select_related('panchayath')
        if unit_id:
            agents = agents.filter(panchayath_id=unit_id)
        return list(agents.order_by('name'))

    def get_agent(self, role, agent_id):
        spec = get_role_spec(role)
        return spec.model.objects.select_related('panchayath').filter(pk=agent_id).first()

    def create_unit(self, data):
        return Panchayath.objects.create(**data)

    def update_unit(self, unit, data):
        for field, value in data.items():
            setattr(unit, field, value)
        unit.save()
        return unit

    def delete_unit(self, unit):
        deleted, _ = Panchayath.objects.filter(pk=unit.pk).delete()
        if not deleted:
            raise HierarchyBackendError(f'Panchayath {unit.pk} does not exist')

    def create_agent(self, role, data):
        spec = get_role_spec(role)
        return spec.model.objects.create(**data)

    def update_agent(self, role, agent, data):
        for field, value in data.items():
            setattr(agent, field, value)
        agent.save()
        return agent

    def delete_agent(self, role, agent):
        spec = get_role_spec(role)
        deleted, _ = spec.model.objects.filter(pk=agent.pk).delete()
        if not deleted:
            raise HierarchyBackendError(f'{spec.label} {agent.pk} does not exist')
