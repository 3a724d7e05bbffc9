# api/views.py

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.exceptions import APIException, NotFound
from rest_framework.response import Response

from apps.hierarchy.roles import Role, get_role_spec
from apps.hierarchy.serializers import PanchayathSerializer, AGENT_SERIALIZERS
from apps.hierarchy.services import get_service
from apps.hierarchy.utils import filter_and_sort_units
from utils.logging import log_user_action

from .permissions import IsAdminUserType

UUID_REGEX = r'[0-9a-fA-F-]{36}'


class BackendUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Hierarchy data is temporarily unavailable.'
    default_code = 'backend_unavailable'


def unwrap(result):
    """Return the value of a ServiceResult or raise BackendUnavailable with its error"""
    if not result.ok:
        raise BackendUnavailable(result.error)
    return result.value


# Panchayaths

class PanchayathViewSet(viewsets.ModelViewSet):
    """Panchayaths with per-role counts, ordered by total agents"""
    serializer_class = PanchayathSerializer
    permission_classes = [IsAdminUserType]
    lookup_value_regex = UUID_REGEX

    def list(self, request, *args, **kwargs):
        units = unwrap(get_service().list_units())
        units = filter_and_sort_units(units, request.query_params.get('search', ''))
        return Response(self.get_serializer(units, many=True).data)

    def get_object(self):
        unit = unwrap(get_service().get_unit(self.kwargs['pk']))
        if unit is None:
            raise NotFound('Panchayath not found.')
        self.check_object_permissions(self.request, unit)
        return unit

    def perform_create(self, serializer):
        unit = unwrap(get_service().create_unit(serializer.validated_data))
        serializer.instance = unit
        log_user_action(self.request.user, 'create_panchayath', {'panchayath_id': str(unit.pk), 'via': 'api'})

    def perform_update(self, serializer):
        unit = unwrap(get_service().update_unit(serializer.instance, serializer.validated_data))
        serializer.instance = unit
        log_user_action(self.request.user, 'update_panchayath', {'panchayath_id': str(unit.pk), 'via': 'api'})

    def perform_destroy(self, instance):
        unwrap(get_service().delete_unit(instance))
        log_user_action(self.request.user, 'delete_panchayath', {'panchayath_id': str(instance.pk), 'via': 'api'})

    @action(detail=True, methods=['get'], url_path=r'agents/(?P<role>[a-z_]+)')
    def agents(self, request, pk=None, role=None):
        """Agents of one role in this panchayath, by name"""
        if role not in Role.values:
            raise NotFound(f'Unknown role: {role}')

        spec = get_role_spec(role)
        unit = self.get_object()
        agents = unwrap(get_service().list_agents(spec.role, unit.pk))

        serializer = AGENT_SERIALIZERS[spec.role](agents, many=True, context=self.get_serializer_context())
        return Response(serializer.data)


# Agents

class AgentViewSet(viewsets.ModelViewSet):
    """
    CRUD for one role, selected by the ``role`` URL segment.

    Lists are filtered by ``panchayath`` and ``ward`` and searched by name or
    mobile number. Writes go through HierarchyService.
    """
    permission_classes = [IsAdminUserType]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['panchayath', 'ward']
    search_fields = ['name', 'mobile_number']
    lookup_url_kwarg = 'agent_id'

    @property
    def spec(self):
        return get_role_spec(self.kwargs['role'])

    def get_queryset(self):
        return self.spec.model.objects.select_related('panchayath').order_by('name')

    def get_serializer_class(self):
        return AGENT_SERIALIZERS[self.spec.role]

    def get_object(self):
        spec = self.spec
        agent = unwrap(get_service().get_agent(spec.role, self.kwargs['agent_id']))
        if agent is None:
            raise NotFound(f'{spec.label} not found.')
        self.check_object_permissions(self.request, agent)
        return agent

    def perform_create(self, serializer):
        spec = self.spec
        agent = unwrap(get_service().create_agent(spec.role, serializer.validated_data))
        serializer.instance = agent
        log_user_action(self.request.user, f'create_{spec.role.value}', {'agent_id': str(agent.pk), 'via': 'api'})

    def perform_update(self, serializer):
        spec = self.spec
        agent = serializer.instance
        agent = unwrap(get_service().update_agent(
            spec.role, agent, serializer.validated_data,
            previous_unit_id=agent.panchayath_id
        ))
        serializer.instance = agent
        log_user_action(self.request.user, f'update_{spec.role.value}', {'agent_id': str(agent.pk), 'via': 'api'})

    def perform_destroy(self, instance):
        spec = self.spec
        unwrap(get_service().delete_agent(spec.role, instance))
        log_user_action(self.request.user, f'delete_{spec.role.value}', {'agent_id': str(instance.pk), 'via': 'api'})
