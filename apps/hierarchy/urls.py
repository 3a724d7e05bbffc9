# apps/hierarchy/urls.py

from django.urls import path

from . import converters  # noqa: F401  registers the role path converters
from . import views

urlpatterns = [
    # Browser
    path('', views.hierarchy_browser, name='hierarchy_browser'),
    path('names/<role:role>/toggle/', views.toggle_name_visibility, name='hierarchy_toggle_names'),

    # Panchayaths
    path('panchayaths/create/', views.create_unit, name='hierarchy_create_unit'),
    path('panchayaths/<uuid:unit_id>/toggle/', views.toggle_unit_expanded, name='hierarchy_toggle_unit'),
    path('panchayaths/<uuid:unit_id>/edit/', views.edit_unit, name='hierarchy_edit_unit'),
    path('panchayaths/<uuid:unit_id>/delete/', views.delete_unit, name='hierarchy_delete_unit'),
    path('panchayaths/<uuid:unit_id>/<drilldown_role:role>/', views.agent_list, name='hierarchy_agent_list'),

    # Agent management
    path('agents/', views.hierarchy_editor, name='hierarchy_editor'),
    path('agents/<role:role>/<uuid:agent_id>/edit/', views.edit_agent, name='hierarchy_edit_agent'),
    path('agents/<role:role>/<uuid:agent_id>/delete/', views.delete_agent, name='hierarchy_delete_agent'),
]
