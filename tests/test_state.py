# tests/test_state.py

import uuid

from django.test import SimpleTestCase

from apps.hierarchy.roles import Role
from apps.hierarchy.state import BrowserState, EditorState


class BrowserStateTest(SimpleTestCase):

    def setUp(self):
        self.session = {}

    def test_units_start_expanded(self):
        state = BrowserState(self.session)
        self.assertTrue(state.is_expanded(uuid.uuid4()))

    def test_toggle_expanded_affects_only_that_unit(self):
        first, second, third = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        state = BrowserState(self.session)
        state.toggle_expanded(second)

        state = BrowserState(self.session)
        self.assertTrue(state.is_expanded(first))
        self.assertFalse(state.is_expanded(second))
        self.assertTrue(state.is_expanded(third))

    def test_toggle_expanded_twice_restores(self):
        unit_id = uuid.uuid4()
        state = BrowserState(self.session)
        self.assertFalse(state.toggle_expanded(unit_id))
        self.assertTrue(state.toggle_expanded(unit_id))

    def test_prune_forgets_unknown_units(self):
        kept, gone = uuid.uuid4(), uuid.uuid4()
        state = BrowserState(self.session)
        state.toggle_expanded(kept)
        state.toggle_expanded(gone)

        state.prune([kept])

        state = BrowserState(self.session)
        self.assertEqual(list(state.expanded), [str(kept)])
        self.assertFalse(state.is_expanded(kept))

    def test_name_visibility_defaults(self):
        state = BrowserState(self.session)
        self.assertTrue(state.names_shown(Role.COORDINATOR))
        self.assertTrue(state.names_shown(Role.SUPERVISOR))
        self.assertFalse(state.names_shown(Role.GROUP_LEADER))
        self.assertFalse(state.names_shown(Role.PRO))

    def test_toggle_names_is_independent_per_role(self):
        state = BrowserState(self.session)
        state.toggle_names(Role.GROUP_LEADER)

        state = BrowserState(self.session)
        self.assertTrue(state.names_shown(Role.GROUP_LEADER))
        self.assertTrue(state.names_shown(Role.COORDINATOR))
        self.assertTrue(state.names_shown(Role.SUPERVISOR))
        self.assertFalse(state.names_shown(Role.PRO))

    def test_customers_have_no_name_visibility(self):
        state = BrowserState(self.session)
        with self.assertRaises(ValueError):
            state.toggle_names(Role.CUSTOMER)

    def test_unknown_roles_in_session_are_ignored(self):
        self.session[BrowserState.SESSION_KEY] = {'show_names': {'mayor': True}}
        state = BrowserState(self.session)
        self.assertNotIn('mayor', state.show_names)


class EditorStateTest(SimpleTestCase):

    def setUp(self):
        self.session = {}

    def test_defaults(self):
        state = EditorState(self.session)
        self.assertEqual(state.panchayath, 'all')
        self.assertTrue(state.all_units)
        self.assertEqual(state.role, Role.COORDINATOR)
        self.assertFalse(state.show_existing)
        self.assertFalse(state.panel_open)

    def test_changing_unit_keeps_role(self):
        state = EditorState(self.session)
        state.update({'role': 'pro'})
        state.update({'panchayath': 'abc'})

        state = EditorState(self.session)
        self.assertEqual(state.role, Role.PRO)
        self.assertEqual(state.panchayath, 'abc')
        self.assertFalse(state.all_units)

    def test_changing_role_keeps_mode(self):
        state = EditorState(self.session)
        state.update({'mode': 'existing'})
        state.update({'role': 'supervisor'})

        state = EditorState(self.session)
        self.assertTrue(state.show_existing)
        self.assertEqual(state.role, Role.SUPERVISOR)

    def test_unknown_role_is_ignored(self):
        state = EditorState(self.session)
        state.update({'role': 'group_leader'})
        state.update({'role': 'mayor'})
        self.assertEqual(state.role, Role.GROUP_LEADER)

    def test_panel_toggle(self):
        state = EditorState(self.session)
        state.update({'panel': 'open'})
        self.assertTrue(EditorState(self.session).panel_open)
        state.update({'panel': 'closed'})
        self.assertFalse(EditorState(self.session).panel_open)

    def test_reset_panchayath(self):
        state = EditorState(self.session)
        state.update({'panchayath': 'abc'})
        state.reset_panchayath()
        self.assertTrue(EditorState(self.session).all_units)
