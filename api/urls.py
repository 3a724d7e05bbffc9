# api/urls.py

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.hierarchy import converters  # noqa: F401  registers the role path converters
from .views import PanchayathViewSet, AgentViewSet

router = DefaultRouter()
router.register(r'panchayaths', PanchayathViewSet, basename='panchayath')

agent_list = AgentViewSet.as_view({'get': 'list', 'post': 'create'})
agent_detail = AgentViewSet.as_view({
    'get': 'retrieve',
    'put': 'update',
    'patch': 'partial_update',
    'delete': 'destroy',
})

urlpatterns = [
    # Agents, one endpoint per role
    path('agents/<role:role>/', agent_list, name='agent-list'),
    path('agents/<role:role>/<uuid:agent_id>/', agent_detail, name='agent-detail'),

    # Router URLs
    path('', include(router.urls)),
]
