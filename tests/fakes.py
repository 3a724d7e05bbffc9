# tests/fakes.py
"""
In-memory HierarchyBackend for view and service tests.

get_service() builds a new backend per request, so the data lives on the
class. Call FakeBackend.reset() in setUp.
"""

from apps.hierarchy.backends import HierarchyBackend, HierarchyBackendError
from apps.hierarchy.models import Panchayath
from apps.hierarchy.roles import Role, ROLE_REGISTRY, COUNTED_ROLES, get_role_spec

FAKE_BACKEND = 'tests.fakes.FakeBackend'


class FakeBackend(HierarchyBackend):
    units = []
    agents = {}
    calls = []
    fail_on = set()

    @classmethod
    def reset(cls):
        cls.units = []
        cls.agents = {role: [] for role in Role}
        cls.calls = []
        cls.fail_on = set()

    @classmethod
    def add_unit(cls, name, number_of_wards=10):
        unit = Panchayath(name=name, number_of_wards=number_of_wards)
        cls.units.append(unit)
        return unit

    @classmethod
    def add_agents(cls, unit, role, count, prefix=None):
        spec = get_role_spec(role)
        created = []
        for i in range(count):
            agent = spec.model(
                name=f'{prefix or spec.label} {i + 1:02d}',
                mobile_number='9876543210',
                panchayath=unit
            )
            cls.agents[spec.role].append(agent)
            created.append(agent)
        return created

    @classmethod
    def calls_to(cls, method):
        return [call for call in cls.calls if call[0] == method]

    def _record(self, method, *args):
        self.calls.append((method,) + args)
        if method in self.fail_on or '*' in self.fail_on:
            raise HierarchyBackendError(f'{method} failed')

    def _with_counts(self, unit):
        for role in COUNTED_ROLES:
            spec = ROLE_REGISTRY[role]
            count = sum(1 for agent in self.agents[role] if agent.panchayath_id == unit.pk)
            setattr(unit, spec.count_field, count)
        return unit

    # Reads

    def list_units(self):
        self._record('list_units')
        return [self._with_counts(unit) for unit in self.units]

    def get_unit(self, unit_id):
        self._record('get_unit', unit_id)
        for unit in self.units:
            if str(unit.pk) == str(unit_id):
                return self._with_counts(unit)
        return None

    def list_agents(self, role, unit_id=None):
        self._record('list_agents', Role(role), unit_id)
        agents = self.agents[Role(role)]
        if unit_id:
            agents = [agent for agent in agents if str(agent.panchayath_id) == str(unit_id)]
        return sorted(agents, key=lambda agent: agent.name)

    def get_agent(self, role, agent_id):
        self._record('get_agent', Role(role), agent_id)
        for agent in self.agents[Role(role)]:
            if str(agent.pk) == str(agent_id):
                return agent
        return None

    # Writes

    def create_unit(self, data):
        self._record('create_unit', data)
        unit = Panchayath(**data)
        self.units.append(unit)
        return unit

    def update_unit(self, unit, data):
        self._record('update_unit', unit.pk, data)
        for field, value in data.items():
            setattr(unit, field, value)
        return unit

    def delete_unit(self, unit):
        self._record('delete_unit', unit.pk)
        FakeBackend.units = [u for u in self.units if u.pk != unit.pk]
        for role in Role:
            self.agents[role] = [a for a in self.agents[role] if a.panchayath_id != unit.pk]

    def create_agent(self, role, data):
        self._record('create_agent', Role(role), data)
        agent = get_role_spec(role).model(**data)
        self.agents[Role(role)].append(agent)
        return agent

    def update_agent(self, role, agent, data):
        self._record('update_agent', Role(role), agent.pk, data)
        for field, value in data.items():
            setattr(agent, field, value)
        return agent

    def delete_agent(self, role, agent):
        self._record('delete_agent', Role(role), agent.pk)
        remaining = [a for a in self.agents[Role(role)] if a.pk != agent.pk]
        if len(remaining) == len(self.agents[Role(role)]):
            raise HierarchyBackendError(f'{role} {agent.pk} does not exist')
        self.agents[Role(role)] = remaining
