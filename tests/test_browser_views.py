# tests/test_browser_views.py

import uuid

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import TestCase, override_settings
from django.urls import reverse

from apps.hierarchy.roles import Role

from .fakes import FakeBackend, FAKE_BACKEND

User = get_user_model()


class BrowserTestMixin:

    def setUp(self):
        cache.clear()
        FakeBackend.reset()
        self.admin = User.objects.create_user(
            username='admin',
            email='admin@test.com',
            password='testpass123',
            user_type='admin'
        )
        self.client.force_login(self.admin)


@override_settings(HIERARCHY={'BACKEND': FAKE_BACKEND, 'CACHE_TIMEOUT': 300})
class HierarchyBrowserTest(BrowserTestMixin, TestCase):

    def test_units_ordered_by_total_agents(self):
        a = FakeBackend.add_unit('Aluva')
        b = FakeBackend.add_unit('Kalady')
        FakeBackend.add_agents(a, Role.COORDINATOR, 4)
        FakeBackend.add_agents(a, Role.PRO, 6)
        FakeBackend.add_agents(b, Role.SUPERVISOR, 10)
        FakeBackend.add_agents(b, Role.GROUP_LEADER, 15)

        response = self.client.get(reverse('hierarchy_browser'))

        self.assertEqual(response.status_code, 200)
        names = [card['unit'].name for card in response.context['unit_cards']]
        self.assertEqual(names, ['Kalady', 'Aluva'])
        self.assertContains(response, 'Total: 25')
        self.assertContains(response, 'Total: 10')

    def test_search_with_no_match_shows_term(self):
        FakeBackend.add_unit('Aluva')

        response = self.client.get(reverse('hierarchy_browser'), {'q': 'xyz'})

        self.assertContains(response, 'No panchayaths found matching "xyz"')
        self.assertNotContains(response, 'Aluva</h2>')

    def test_no_units_shows_empty_state(self):
        response = self.client.get(reverse('hierarchy_browser'))
        self.assertContains(response, 'No panchayaths found')

    def test_chart_tab_supplies_chart_data(self):
        unit = FakeBackend.add_unit('Aluva')
        FakeBackend.add_agents(unit, Role.PRO, 3)

        response = self.client.get(reverse('hierarchy_browser'), {'tab': 'chart'})

        self.assertEqual(response.context['active_tab'], 'chart')
        self.assertEqual(response.context['chart_data']['labels'], ['Aluva'])
        self.assertContains(response, 'id="chart-data"')

    def test_list_failure_shows_error_notification(self):
        FakeBackend.add_unit('Aluva')
        FakeBackend.fail_on = {'list_units'}

        response = self.client.get(reverse('hierarchy_browser'))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, '<strong>Error</strong>', html=False)
        self.assertContains(response, 'Failed to fetch panchayaths')

    def test_list_failure_keeps_previous_list(self):
        FakeBackend.add_unit('Aluva')
        self.client.get(reverse('hierarchy_browser'))
        cache.delete('hierarchy:units')
        FakeBackend.fail_on = {'list_units'}

        response = self.client.get(reverse('hierarchy_browser'))

        self.assertContains(response, 'Failed to fetch panchayaths')
        self.assertContains(response, 'Aluva')

    def test_toggle_expand_affects_only_target_unit(self):
        first = FakeBackend.add_unit('Aluva')
        FakeBackend.add_unit('Kalady')

        response = self.client.post(reverse('hierarchy_toggle_unit', args=[first.pk]), {'q': 'a'})
        self.assertRedirects(response, reverse('hierarchy_browser') + '?q=a', fetch_redirect_response=False)

        response = self.client.get(reverse('hierarchy_browser'))
        expanded = {card['unit'].name: card['expanded'] for card in response.context['unit_cards']}
        self.assertEqual(expanded, {'Aluva': False, 'Kalady': True})

    def test_browser_drops_expand_state_of_deleted_units(self):
        unit = FakeBackend.add_unit('Aluva')
        self.client.post(reverse('hierarchy_toggle_unit', args=[unit.pk]))
        self.client.post(reverse('hierarchy_toggle_unit', args=[uuid.uuid4()]))
        self.assertEqual(len(self.client.session['hierarchy_browser']['expanded']), 2)

        self.client.get(reverse('hierarchy_browser'))

        self.assertEqual(list(self.client.session['hierarchy_browser']['expanded']), [str(unit.pk)])

    def test_toggle_expand_requires_post(self):
        unit = FakeBackend.add_unit('Aluva')
        response = self.client.get(reverse('hierarchy_toggle_unit', args=[unit.pk]))
        self.assertEqual(response.status_code, 405)

    def test_toggle_names_changes_labels_only(self):
        unit = FakeBackend.add_unit('Aluva')
        FakeBackend.add_agents(unit, Role.GROUP_LEADER, 3)

        before = self.client.get(reverse('hierarchy_browser'))
        self.assertContains(before, 'Group Leaders (Names Hidden)')
        self.assertContains(before, 'Coordinators (Names Shown)')

        self.client.post(reverse('hierarchy_toggle_names', args=['group_leader']))
        after = self.client.get(reverse('hierarchy_browser'))

        self.assertContains(after, 'Group Leaders (Names Shown)')
        self.assertContains(after, 'Coordinators (Names Shown)')
        self.assertContains(after, 'Supervisors (Names Shown)')
        self.assertContains(after, 'PROs (Names Hidden)')

        counts_before = [item['count'] for item in before.context['unit_cards'][0]['roles']]
        counts_after = [item['count'] for item in after.context['unit_cards'][0]['roles']]
        self.assertEqual(counts_before, counts_after)
        # The toggle never reaches the backend
        self.assertEqual(len(FakeBackend.calls_to('list_agents')), 0)

    def test_toggle_names_for_customer_is_404(self):
        response = self.client.post(reverse('hierarchy_toggle_names', args=['customer']))
        self.assertEqual(response.status_code, 404)

    def test_unknown_role_is_404(self):
        response = self.client.post('/hierarchy/names/mayor/toggle/')
        self.assertEqual(response.status_code, 404)


@override_settings(HIERARCHY={'BACKEND': FAKE_BACKEND, 'CACHE_TIMEOUT': 300})
class UnitDeleteTest(BrowserTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.unit = FakeBackend.add_unit('Aluva')

    def test_confirmation_page_describes_cascade(self):
        response = self.client.get(reverse('hierarchy_delete_unit', args=[self.unit.pk]))

        self.assertContains(response, 'Are you sure you want to delete "Aluva"?')
        self.assertContains(response, 'coordinators, supervisors, group leaders, PROs, and customers')

    def test_cancelling_issues_no_delete(self):
        self.client.get(reverse('hierarchy_delete_unit', args=[self.unit.pk]))
        self.client.get(reverse('hierarchy_browser'))

        self.assertEqual(FakeBackend.calls_to('delete_unit'), [])
        self.assertEqual(len(FakeBackend.units), 1)

    def test_confirming_deletes_and_refetches(self):
        self.client.get(reverse('hierarchy_browser'))

        response = self.client.post(reverse('hierarchy_delete_unit', args=[self.unit.pk]), follow=True)

        self.assertEqual(len(FakeBackend.calls_to('delete_unit')), 1)
        self.assertContains(response, 'Aluva has been deleted successfully')
        self.assertEqual(response.context['unit_cards'], [])
        self.assertEqual(len(FakeBackend.calls_to('list_units')), 2)

    def test_failed_delete_keeps_unit(self):
        self.client.get(reverse('hierarchy_browser'))
        FakeBackend.fail_on = {'delete_unit'}

        response = self.client.post(reverse('hierarchy_delete_unit', args=[self.unit.pk]), follow=True)

        self.assertContains(response, 'Failed to delete panchayath')
        self.assertEqual([card['unit'].name for card in response.context['unit_cards']], ['Aluva'])

    def test_missing_unit_is_404(self):
        response = self.client.get(reverse('hierarchy_delete_unit', args=['00000000-0000-0000-0000-000000000000']))
        self.assertEqual(response.status_code, 404)


@override_settings(HIERARCHY={'BACKEND': FAKE_BACKEND, 'CACHE_TIMEOUT': 300})
class DrilldownTest(BrowserTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.unit = FakeBackend.add_unit('Aluva')

    def test_empty_supervisor_list_message(self):
        response = self.client.get(reverse('hierarchy_agent_list', args=[self.unit.pk, 'supervisor']))

        self.assertContains(response, 'Supervisors - Aluva')
        self.assertContains(response, 'No supervisors found')
        self.assertNotContains(response, 'No group leaders found')

    def test_empty_group_leader_list_message(self):
        response = self.client.get(reverse('hierarchy_agent_list', args=[self.unit.pk, 'group_leader']))
        self.assertContains(response, 'No group leaders found')

    def test_agents_listed_by_name(self):
        FakeBackend.add_agents(self.unit, Role.SUPERVISOR, 1, prefix='Zara')
        FakeBackend.add_agents(self.unit, Role.SUPERVISOR, 1, prefix='Anil')

        response = self.client.get(reverse('hierarchy_agent_list', args=[self.unit.pk, 'supervisor']))

        self.assertEqual([agent.name for agent in response.context['agents']], ['Anil 01', 'Zara 01'])

    def test_count_only_roles_have_no_drilldown(self):
        response = self.client.get(f'/hierarchy/panchayaths/{self.unit.pk}/pro/')
        self.assertEqual(response.status_code, 404)

    def test_delete_agent_refreshes_counts_and_list(self):
        supervisors = FakeBackend.add_agents(self.unit, Role.SUPERVISOR, 2)
        list_url = reverse('hierarchy_agent_list', args=[self.unit.pk, 'supervisor'])
        self.client.get(reverse('hierarchy_browser'))
        self.client.get(list_url)

        response = self.client.post(
            reverse('hierarchy_delete_agent', args=['supervisor', supervisors[0].pk]),
            {'next': list_url},
            follow=True
        )

        self.assertRedirects(response, list_url)
        self.assertContains(response, 'Supervisor deleted successfully')
        self.assertEqual(len(response.context['agents']), 1)

        browser = self.client.get(reverse('hierarchy_browser'))
        supervisor_cell = browser.context['unit_cards'][0]['roles'][1]
        self.assertEqual(supervisor_cell['count'], 1)

    def test_cancelling_agent_delete_issues_no_delete(self):
        supervisor = FakeBackend.add_agents(self.unit, Role.SUPERVISOR, 1)[0]

        response = self.client.get(reverse('hierarchy_delete_agent', args=['supervisor', supervisor.pk]))

        self.assertContains(response, 'Are you sure you want to delete supervisor')
        self.assertEqual(FakeBackend.calls_to('delete_agent'), [])

    def test_failed_agent_delete_shows_error(self):
        supervisor = FakeBackend.add_agents(self.unit, Role.SUPERVISOR, 1)[0]
        FakeBackend.fail_on = {'delete_agent'}

        response = self.client.post(
            reverse('hierarchy_delete_agent', args=['supervisor', supervisor.pk]),
            follow=True
        )

        self.assertContains(response, 'Failed to delete supervisor')
        self.assertEqual(len(FakeBackend.agents[Role.SUPERVISOR]), 1)


class BrowserAccessTest(TestCase):

    def test_anonymous_redirected_to_login(self):
        response = self.client.get(reverse('hierarchy_browser'))
        self.assertRedirects(response, '/login/?next=/hierarchy/', fetch_redirect_response=False)

    def test_officer_forbidden(self):
        officer = User.objects.create_user(username='officer', password='testpass123', user_type='officer')
        self.client.force_login(officer)
        response = self.client.get(reverse('hierarchy_browser'))
        self.assertEqual(response.status_code, 403)
