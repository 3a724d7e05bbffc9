# apps/hierarchy/cache.py
"""
Cache keys for the unit list and drill-down lists, and their invalidation
"""

from django.core.cache import cache

from .roles import Role

UNITS_CACHE_KEY = 'hierarchy:units'
ALL_UNITS = 'all'


def agents_cache_key(role, unit_id=None):
    return f'hierarchy:agents:{role}:{unit_id or ALL_UNITS}'


def last_good_key(key):
    """Key holding the last successful result for ``key``; never invalidated"""
    return f'{key}:last_good'


def invalidate_unit_caches(unit_id=None):
    """
    Drop the unit list and every drill-down list touching ``unit_id``.

    The all-units agent lists are dropped too, since they include the unit.
    """
    keys = [UNITS_CACHE_KEY]
    for role in Role:
        keys.append(agents_cache_key(role.value))
        if unit_id:
            keys.append(agents_cache_key(role.value, unit_id))
    cache.delete_many(keys)
