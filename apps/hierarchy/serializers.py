# apps/hierarchy/serializers.py

from rest_framework import serializers
from .models import Panchayath, Coordinator, Supervisor, GroupLeader, Pro, Customer
from .roles import Role


class PanchayathSerializer(serializers.ModelSerializer):
    coordinator_count = serializers.SerializerMethodField()
    supervisor_count = serializers.SerializerMethodField()
    group_leader_count = serializers.SerializerMethodField()
    pro_count = serializers.SerializerMethodField()
    total_agents = serializers.IntegerField(read_only=True)

    class Meta:
        model = Panchayath
        fields = [
            'id', 'name', 'number_of_wards',
            'coordinator_count', 'supervisor_count', 'group_leader_count', 'pro_count',
            'total_agents', 'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']

    # Counts are annotations; a freshly created unit has none yet
    def get_coordinator_count(self, obj):
        return getattr(obj, 'coordinator_count', 0) or 0

    def get_supervisor_count(self, obj):
        return getattr(obj, 'supervisor_count', 0) or 0

    def get_group_leader_count(self, obj):
        return getattr(obj, 'group_leader_count', 0) or 0

    def get_pro_count(self, obj):
        return getattr(obj, 'pro_count', 0) or 0

    def validate_name(self, value):
        name = value.strip()
        duplicates = Panchayath.objects.filter(name__iexact=name)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError('A panchayath with this name already exists.')
        return name


class AgentSerializer(serializers.ModelSerializer):
    """Shared validation for every role, mirroring AgentForm"""

    panchayath_name = serializers.CharField(source='panchayath.name', read_only=True)

    parent_field = None

    def validate_name(self, value):
        return value.strip()

    def validate(self, attrs):
        attrs = super().validate(attrs)
        instance = self.instance

        panchayath = attrs.get('panchayath', getattr(instance, 'panchayath', None))
        ward = attrs.get('ward', getattr(instance, 'ward', None))

        if panchayath and ward and ward > panchayath.number_of_wards:
            raise serializers.ValidationError({
                'ward': f'{panchayath.name} only has {panchayath.number_of_wards} wards.'
            })

        if self.parent_field:
            parent = attrs.get(self.parent_field, getattr(instance, self.parent_field, None))
            if parent and panchayath and parent.panchayath_id != panchayath.pk:
                raise serializers.ValidationError({
                    self.parent_field: 'Must belong to the same panchayath.'
                })

        return attrs


AGENT_FIELDS = ['id', 'name', 'mobile_number', 'panchayath', 'panchayath_name', 'ward', 'created_at', 'updated_at']


class CoordinatorSerializer(AgentSerializer):
    class Meta:
        model = Coordinator
        fields = AGENT_FIELDS + ['rating']
        read_only_fields = ['created_at', 'updated_at']


class SupervisorSerializer(AgentSerializer):
    parent_field = 'coordinator'

    class Meta:
        model = Supervisor
        fields = AGENT_FIELDS + ['coordinator']
        read_only_fields = ['created_at', 'updated_at']


class GroupLeaderSerializer(AgentSerializer):
    parent_field = 'supervisor'

    class Meta:
        model = GroupLeader
        fields = AGENT_FIELDS + ['supervisor']
        read_only_fields = ['created_at', 'updated_at']
        # Ward uniqueness is checked in validate(); the ward is optional
        validators = []

    def validate(self, attrs):
        attrs = super().validate(attrs)
        instance = self.instance

        panchayath = attrs.get('panchayath', getattr(instance, 'panchayath', None))
        ward = attrs.get('ward', getattr(instance, 'ward', None))

        if panchayath and ward:
            taken = GroupLeader.objects.filter(panchayath=panchayath, ward=ward)
            if instance is not None:
                taken = taken.exclude(pk=instance.pk)
            if taken.exists():
                raise serializers.ValidationError({'ward': 'This ward already has a group leader.'})

        return attrs


class ProSerializer(AgentSerializer):
    parent_field = 'group_leader'

    class Meta:
        model = Pro
        fields = AGENT_FIELDS + ['group_leader']
        read_only_fields = ['created_at', 'updated_at']


class CustomerSerializer(AgentSerializer):
    parent_field = 'pro'

    class Meta:
        model = Customer
        fields = AGENT_FIELDS + ['pro', 'customer_count']
        read_only_fields = ['created_at', 'updated_at']


AGENT_SERIALIZERS = {
    Role.COORDINATOR: CoordinatorSerializer,
    Role.SUPERVISOR: SupervisorSerializer,
    Role.GROUP_LEADER: GroupLeaderSerializer,
    Role.PRO: ProSerializer,
    Role.CUSTOMER: CustomerSerializer,
}
