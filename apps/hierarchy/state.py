# apps/hierarchy/state.py
"""
Per-operator view state for the browser and the editor, kept in the session.

None of this is hierarchy data: it only decides what is shown.
"""

from .cache import ALL_UNITS
from .roles import Role, ROLE_REGISTRY, COUNTED_ROLES


class BrowserState:
    """Expanded units and per-role name visibility on the browser page"""

    SESSION_KEY = 'hierarchy_browser'

    def __init__(self, session):
        self.session = session
        data = session.get(self.SESSION_KEY) or {}

        self.expanded = dict(data.get('expanded', {}))
        self.show_names = {role.value: ROLE_REGISTRY[role].names_shown for role in COUNTED_ROLES}
        for role, shown in data.get('show_names', {}).items():
            if role in self.show_names:
                self.show_names[role] = bool(shown)

    def is_expanded(self, unit_id):
        # Units start expanded
        return self.expanded.get(str(unit_id), True)

    def toggle_expanded(self, unit_id):
        key = str(unit_id)
        self.expanded[key] = not self.is_expanded(key)
        self.save()
        return self.expanded[key]

    def prune(self, unit_ids):
        """Forget expand state for units that no longer exist"""
        known = {str(unit_id) for unit_id in unit_ids}
        stale = [key for key in self.expanded if key not in known]
        for key in stale:
            del self.expanded[key]
        if stale:
            self.save()

    def names_shown(self, role):
        return self.show_names.get(Role(role).value, False)

    def toggle_names(self, role):
        key = Role(role).value
        if key not in self.show_names:
            raise ValueError(f'{key} has no name visibility setting')
        self.show_names[key] = not self.show_names[key]
        self.save()
        return self.show_names[key]

    def save(self):
        self.session[self.SESSION_KEY] = {
            'expanded': self.expanded,
            'show_names': self.show_names,
        }


class EditorState:
    """
    Selections on the agent management page.

    Each query parameter updates only the selection it names, so changing
    the unit keeps the role and changing the role keeps the mode.
    """

    SESSION_KEY = 'hierarchy_editor'
    DEFAULTS = {
        'panchayath': ALL_UNITS,
        'role': Role.COORDINATOR.value,
        'show_existing': False,
        'panel_open': False,
    }

    def __init__(self, session):
        self.session = session
        data = dict(self.DEFAULTS)
        data.update(session.get(self.SESSION_KEY) or {})

        self.panchayath = data['panchayath'] or ALL_UNITS
        self.role = Role(data['role']) if data['role'] in Role.values else Role.COORDINATOR
        self.show_existing = bool(data['show_existing'])
        self.panel_open = bool(data['panel_open'])

    @property
    def all_units(self):
        return self.panchayath == ALL_UNITS

    def update(self, params):
        """Apply ``panchayath``, ``role``, ``mode`` and ``panel`` parameters"""
        if 'panchayath' in params:
            self.panchayath = params['panchayath'] or ALL_UNITS
        if 'role' in params and params['role'] in Role.values:
            self.role = Role(params['role'])
        if 'mode' in params:
            self.show_existing = params['mode'] == 'existing'
        if 'panel' in params:
            self.panel_open = params['panel'] == 'open'
        self.save()

    def reset_panchayath(self):
        self.panchayath = ALL_UNITS
        self.save()

    def save(self):
        self.session[self.SESSION_KEY] = {
            'panchayath': str(self.panchayath),
            'role': self.role.value,
            'show_existing': self.show_existing,
            'panel_open': self.panel_open,
        }
