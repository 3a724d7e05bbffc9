# apps/hierarchy/views.py
"""
Hierarchy views: the panchayath browser for admins and agent management.

All hierarchy data goes through HierarchyService. A failed call is shown
as an error notification and the page renders with whatever data the
service fell back to.
"""

from urllib.parse import urlencode

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.http import Http404
from django.shortcuts import render, redirect
from django.urls import reverse
from django.views.decorators.http import require_POST

from apps.accounts.views import is_admin
from utils.decorators import admin_required
from utils.helpers import get_next_url
from utils.logging import log_user_action

from .forms import PanchayathForm
from .roles import ROLE_REGISTRY, COUNTED_ROLES, get_role_spec
from .services import get_service
from .state import BrowserState, EditorState
from .utils import filter_and_sort_units, role_counts, prepare_chart_data

BROWSER_TABS = ('list', 'chart')


def browser_url(search=''):
    url = reverse('hierarchy_browser')
    if search:
        url = f'{url}?{urlencode({"q": search})}'
    return url


def load_unit(request, service, unit_id):
    """
    Fetch a unit for a unit-scoped page.

    Raises Http404 if the unit does not exist. Returns None (after queueing
    the error notification) if the backend call failed.
    """
    result = service.get_unit(unit_id)
    if not result.ok:
        messages.error(request, result.error)
        return None
    if result.value is None:
        raise Http404('Panchayath not found')
    return result.value


def load_agent(request, service, spec, agent_id):
    result = service.get_agent(spec.role, agent_id)
    if not result.ok:
        messages.error(request, result.error)
        return None
    if result.value is None:
        raise Http404(f'{spec.label} not found')
    return result.value


def agent_return_url(request, spec, agent):
    """Where to go after editing or deleting ``agent`` when no ``next`` is given"""
    if spec.drilldown and is_admin(request.user):
        return reverse('hierarchy_agent_list', args=[agent.panchayath_id, spec.role.value])
    return reverse('hierarchy_editor')


# ============================================================================
# HIERARCHY BROWSER
# ============================================================================

@admin_required
def hierarchy_browser(request):
    """Every panchayath with its per-role counts, searchable, busiest first"""
    service = get_service()
    state = BrowserState(request.session)

    search_query = request.GET.get('q', '')
    active_tab = request.GET.get('tab', 'list')
    if active_tab not in BROWSER_TABS:
        active_tab = 'list'

    result = service.list_units()
    if not result.ok:
        messages.error(request, result.error)

    all_units = result.value
    if result.ok:
        state.prune(unit.pk for unit in all_units)
    units = filter_and_sort_units(all_units, search_query)

    unit_cards = []
    for unit in units:
        roles = []
        for spec, count in role_counts(unit):
            roles.append({
                'spec': spec,
                'count': count,
                'names_shown': state.names_shown(spec.role),
                'drilldown_url': (
                    reverse('hierarchy_agent_list', args=[unit.pk, spec.role.value])
                    if spec.drilldown else None
                ),
            })
        unit_cards.append({
            'unit': unit,
            'total': unit.total_agents,
            'expanded': state.is_expanded(unit.pk),
            'roles': roles,
        })

    name_toggles = [
        {'spec': ROLE_REGISTRY[role], 'shown': state.names_shown(role)}
        for role in COUNTED_ROLES
    ]

    context = {
        'unit_cards': unit_cards,
        'search_query': search_query,
        'active_tab': active_tab,
        'name_toggles': name_toggles,
        'has_units': bool(all_units),
        'chart_data': prepare_chart_data(filter_and_sort_units(all_units)),
    }

    return render(request, 'hierarchy/browser.html', context)


@admin_required
@require_POST
def toggle_unit_expanded(request, unit_id):
    BrowserState(request.session).toggle_expanded(unit_id)
    return redirect(browser_url(request.POST.get('q', '')))


@admin_required
@require_POST
def toggle_name_visibility(request, role):
    """Flip the names shown/hidden label for one role"""
    state = BrowserState(request.session)
    try:
        state.toggle_names(role)
    except ValueError:
        raise Http404(f'{role.label} has no name visibility setting')
    return redirect(browser_url(request.POST.get('q', '')))


# ============================================================================
# PANCHAYATH CRUD
# ============================================================================

@admin_required
def create_unit(request):
    """Create a panchayath"""
    if request.method == 'POST':
        form = PanchayathForm(request.POST)
        if form.is_valid():
            result = get_service().create_unit(form.cleaned_data)
            if result.ok:
                unit = result.value
                log_user_action(request.user, 'create_panchayath', {'panchayath_id': str(unit.pk)})
                messages.success(request, f'{unit.name} has been created successfully')
                return redirect('hierarchy_browser')
            messages.error(request, result.error)
    else:
        form = PanchayathForm()

    return render(request, 'hierarchy/unit_form.html', {'form': form, 'unit': None})


@admin_required
def edit_unit(request, unit_id):
    """Edit a panchayath using the creation form seeded with its values"""
    service = get_service()
    unit = load_unit(request, service, unit_id)
    if unit is None:
        return redirect('hierarchy_browser')

    if request.method == 'POST':
        form = PanchayathForm(request.POST, instance=unit)
        if form.is_valid():
            result = service.update_unit(unit, form.cleaned_data)
            if result.ok:
                log_user_action(request.user, 'update_panchayath', {'panchayath_id': str(unit.pk)})
                messages.success(request, f'{unit.name} has been updated successfully')
                return redirect('hierarchy_browser')
            messages.error(request, result.error)
    else:
        form = PanchayathForm(instance=unit)

    return render(request, 'hierarchy/unit_form.html', {'form': form, 'unit': unit})


@admin_required
def delete_unit(request, unit_id):
    """Confirm, then delete a panchayath and everything under it"""
    service = get_service()
    unit = load_unit(request, service, unit_id)
    if unit is None:
        return redirect('hierarchy_browser')

    if request.method == 'POST':
        result = service.delete_unit(unit)
        if result.ok:
            log_user_action(request.user, 'delete_panchayath', {'panchayath_id': str(unit.pk)})
            messages.success(request, f'{unit.name} has been deleted successfully')
        else:
            messages.error(request, result.error)
        return redirect('hierarchy_browser')

    context = {
        'unit': unit,
        'cascade_roles': [
            spec.plural if spec.label.isupper() else spec.plural.lower()
            for spec in ROLE_REGISTRY.values()
        ],
    }

    return render(request, 'hierarchy/unit_confirm_delete.html', context)


# ============================================================================
# AGENTS
# ============================================================================

@admin_required
def agent_list(request, unit_id, role):
    """Supervisors or group leaders of one panchayath, by name"""
    spec = get_role_spec(role)
    service = get_service()
    unit = load_unit(request, service, unit_id)
    if unit is None:
        return redirect('hierarchy_browser')

    result = service.list_agents(spec.role, unit.pk)
    if not result.ok:
        messages.error(request, result.error)

    context = {
        'spec': spec,
        'unit': unit,
        'agents': result.value,
        'next_url': request.get_full_path(),
    }

    return render(request, 'hierarchy/agent_list.html', context)


@login_required
def edit_agent(request, role, agent_id):
    spec = get_role_spec(role)
    service = get_service()
    agent = load_agent(request, service, spec, agent_id)
    if agent is None:
        return redirect(get_next_url(request, reverse('hierarchy_editor')))

    return_url = get_next_url(request, agent_return_url(request, spec, agent))
    # Binding the form writes the posted unit onto the instance
    previous_unit_id = agent.panchayath_id

    if request.method == 'POST':
        form = spec.form_class(request.POST, instance=agent)
        if form.is_valid():
            result = service.update_agent(
                spec.role, agent, form.cleaned_data,
                previous_unit_id=previous_unit_id
            )
            if result.ok:
                log_user_action(request.user, f'update_{spec.role.value}', {'agent_id': str(agent.pk)})
                messages.success(request, f'{spec.label} updated successfully')
                return redirect(return_url)
            messages.error(request, result.error)
    else:
        form = spec.form_class(instance=agent)

    context = {
        'form': form,
        'spec': spec,
        'agent': agent,
        'return_url': return_url,
    }

    return render(request, 'hierarchy/agent_form.html', context)


@login_required
def delete_agent(request, role, agent_id):
    """Confirm, then delete one agent. Leaving the page deletes nothing."""
    spec = get_role_spec(role)
    service = get_service()
    agent = load_agent(request, service, spec, agent_id)
    if agent is None:
        return redirect(get_next_url(request, reverse('hierarchy_editor')))

    return_url = get_next_url(request, agent_return_url(request, spec, agent))

    if request.method == 'POST':
        result = service.delete_agent(spec.role, agent)
        if result.ok:
            log_user_action(request.user, f'delete_{spec.role.value}', {'agent_id': str(agent.pk)})
            messages.success(request, f'{spec.label} deleted successfully')
        else:
            messages.error(request, result.error)
        return redirect(return_url)

    context = {
        'spec': spec,
        'agent': agent,
        'return_url': return_url,
    }

    return render(request, 'hierarchy/agent_confirm_delete.html', context)


# ============================================================================
# AGENT MANAGEMENT
# ============================================================================

@login_required
def hierarchy_editor(request):
    """
    Agent management panel.

    Selections (panchayath, role, add/browse mode, panel open) live in the
    session and are changed through query parameters, one at a time.
    """
    service = get_service()
    state = EditorState(request.session)
    state.update(request.GET)
    spec = get_role_spec(state.role)

    context = {
        'state': state,
        'spec': spec,
        'role_cards': [
            {'spec': card, 'selected': card.role == state.role}
            for card in ROLE_REGISTRY.values()
        ],
    }

    if not state.panel_open:
        if request.method == 'POST':
            return redirect('hierarchy_editor')
        return render(request, 'hierarchy/editor.html', context)

    units_result = service.list_units()
    if not units_result.ok:
        messages.error(request, units_result.error)
    units = units_result.value

    selected_unit = None
    if not state.all_units:
        selected_unit = next((unit for unit in units if str(unit.pk) == state.panchayath), None)
        if selected_unit is None and units_result.ok:
            # Unit no longer exists
            state.reset_panchayath()

    context.update({
        'units': units,
        'selected_unit': selected_unit,
    })

    if state.show_existing:
        if request.method == 'POST':
            return redirect('hierarchy_editor')

        agents_result = service.list_agents(spec.role, selected_unit.pk if selected_unit else None)
        if not agents_result.ok:
            messages.error(request, agents_result.error)

        paginator = Paginator(agents_result.value, settings.HIERARCHY.get('AGENT_LIST_PAGE_SIZE', 50))
        context.update({
            'agents': paginator.get_page(request.GET.get('page')),
            'next_url': reverse('hierarchy_editor'),
        })
        return render(request, 'hierarchy/editor.html', context)

    if request.method == 'POST':
        form = spec.form_class(request.POST, panchayath=selected_unit)
        if form.is_valid():
            result = service.create_agent(spec.role, form.cleaned_data)
            if result.ok:
                agent = result.value
                log_user_action(request.user, f'create_{spec.role.value}', {'agent_id': str(agent.pk)})
                messages.success(request, f'{spec.label} {agent.name} created successfully')
                return redirect('hierarchy_editor')
            messages.error(request, result.error)
    else:
        form = spec.form_class(panchayath=selected_unit)

    context['form'] = form
    return render(request, 'hierarchy/editor.html', context)
