# apps/hierarchy/utils.py

from .roles import ROLE_REGISTRY, COUNTED_ROLES


def filter_and_sort_units(units, search_term=''):
    """
    Units whose name contains ``search_term`` (case-insensitive), ordered by
    total agent count, highest first. Units with equal totals keep their
    incoming order.
    """
    needle = (search_term or '').lower()
    matching = [unit for unit in units if needle in unit.name.lower()]
    return sorted(matching, key=lambda unit: unit.total_agents, reverse=True)


def role_counts(unit):
    """(spec, count) for each counted role, in hierarchy order"""
    counts = []
    for role in COUNTED_ROLES:
        spec = ROLE_REGISTRY[role]
        counts.append((spec, getattr(unit, spec.count_field, 0) or 0))
    return counts


def prepare_chart_data(units):
    """Data for the chart tab: one label per unit and one series per counted role"""
    chart_data = {
        'labels': [unit.name for unit in units],
        'series': [],
    }

    for role in COUNTED_ROLES:
        spec = ROLE_REGISTRY[role]
        chart_data['series'].append({
            'role': spec.role.value,
            'label': spec.plural,
            'data': [getattr(unit, spec.count_field, 0) or 0 for unit in units],
        })

    return chart_data
