# apps/hierarchy/services.py
"""
HierarchyService: the guarded front of a HierarchyBackend.

Reads go to the backend on every call unless HIERARCHY['CACHE_TIMEOUT']
is positive, in which case they are cached until a mutation invalidates them.

Every call is independently guarded. A failing backend call is logged and
comes back as a ServiceResult carrying an error message; it never raises.
Reads fall back to the last result that succeeded. Successful writes send
``mutation_succeeded`` so cached counts and drill-down lists are refetched.
"""

import logging

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError
from django.utils.module_loading import import_string

from .backends import HierarchyBackendError
from .cache import UNITS_CACHE_KEY, agents_cache_key, last_good_key
from .roles import get_role_spec
from .signals import mutation_succeeded

logger = logging.getLogger('hierarchy')

BACKEND_ERRORS = (DatabaseError, HierarchyBackendError)


class ServiceResult:
    """Outcome of a guarded call: ``value`` on success, ``error`` message on failure"""

    def __init__(self, value=None, error=None):
        self.value = value
        self.error = error

    @property
    def ok(self):
        return self.error is None

    def __repr__(self):
        if self.ok:
            return f"<ServiceResult ok value={self.value!r}>"
        return f"<ServiceResult error={self.error!r}>"


def get_backend():
    backend_path = settings.HIERARCHY.get('BACKEND', 'apps.hierarchy.backends.DjangoHierarchyBackend')
    return import_string(backend_path)()


def get_service():
    return HierarchyService(get_backend())


class HierarchyService:

    def __init__(self, backend, timeout=None):
        self.backend = backend
        if timeout is None:
            timeout = settings.HIERARCHY.get('CACHE_TIMEOUT', 0)
        self.timeout = timeout

    # Reads

    def _cached_read(self, key, fetch, error_message):
        # A zero timeout reads through to the backend every time
        if self.timeout:
            cached = cache.get(key)
            if cached is not None:
                return ServiceResult(cached)

        try:
            value = fetch()
        except BACKEND_ERRORS:
            logger.exception(error_message)
            return ServiceResult(cache.get(last_good_key(key), []), error=error_message)

        if self.timeout:
            cache.set(key, value, self.timeout)
        cache.set(last_good_key(key), value, None)
        return ServiceResult(value)

    def list_units(self):
        return self._cached_read(
            UNITS_CACHE_KEY,
            self.backend.list_units,
            'Failed to fetch panchayaths'
        )

    def list_agents(self, role, unit_id=None):
        spec = get_role_spec(role)
        return self._cached_read(
            agents_cache_key(spec.role, unit_id),
            lambda: self.backend.list_agents(spec.role, unit_id),
            f'Failed to fetch {spec.plural.lower()}'
        )

    def get_unit(self, unit_id):
        try:
            return ServiceResult(self.backend.get_unit(unit_id))
        except BACKEND_ERRORS:
            logger.exception('Failed to fetch panchayath %s', unit_id)
            return ServiceResult(error='Failed to fetch panchayath')

    def get_agent(self, role, agent_id):
        spec = get_role_spec(role)
        try:
            return ServiceResult(self.backend.get_agent(spec.role, agent_id))
        except BACKEND_ERRORS:
            logger.exception('Failed to fetch %s %s', spec.role, agent_id)
            return ServiceResult(error=f'Failed to fetch {spec.noun}')

    # Writes

    def _mutate(self, action, noun, call, role=None, unit_ids=()):
        try:
            value = call()
        except BACKEND_ERRORS:
            logger.exception('Failed to %s %s', action, noun)
            return ServiceResult(error=f'Failed to {action} {noun}')

        for unit_id in dict.fromkeys(unit_ids):
            mutation_succeeded.send(sender=self.__class__, role=role, unit_id=unit_id)
        logger.info('%s %s', action.capitalize(), noun)
        return ServiceResult(value)

    def create_unit(self, data):
        result = self._mutate('create', 'panchayath', lambda: self.backend.create_unit(data))
        if result.ok:
            mutation_succeeded.send(sender=self.__class__, role=None, unit_id=result.value.pk)
        return result

    def update_unit(self, unit, data):
        return self._mutate(
            'update', 'panchayath',
            lambda: self.backend.update_unit(unit, data),
            unit_ids=[unit.pk]
        )

    def delete_unit(self, unit):
        return self._mutate(
            'delete', 'panchayath',
            lambda: self.backend.delete_unit(unit),
            unit_ids=[unit.pk]
        )

    def create_agent(self, role, data):
        spec = get_role_spec(role)
        unit = data.get('panchayath')
        return self._mutate(
            'create', spec.noun,
            lambda: self.backend.create_agent(spec.role, data),
            role=spec.role,
            unit_ids=[unit.pk if unit else None]
        )

    def update_agent(self, role, agent, data, previous_unit_id=None):
        """``previous_unit_id`` is the agent's unit before the edit, so both units are refreshed on a move"""
        spec = get_role_spec(role)
        unit = data.get('panchayath')
        unit_ids = [previous_unit_id or agent.panchayath_id]
        if unit is not None:
            unit_ids.append(unit.pk)
        return self._mutate(
            'update', spec.noun,
            lambda: self.backend.update_agent(spec.role, agent, data),
            role=spec.role,
            unit_ids=unit_ids
        )

    def delete_agent(self, role, agent):
        spec = get_role_spec(role)
        return self._mutate(
            'delete', spec.noun,
            lambda: self.backend.delete_agent(spec.role, agent),
            role=spec.role,
            unit_ids=[agent.panchayath_id]
        )
