# apps/hierarchy/admin.py

from django.contrib import admin
from .models import Panchayath, Coordinator, Supervisor, GroupLeader, Pro, Customer


class AgentAdmin(admin.ModelAdmin):
    list_display = ('name', 'mobile_number', 'panchayath', 'ward', 'created_at')
    list_filter = ('panchayath',)
    search_fields = ('name', 'mobile_number', 'panchayath__name')
    list_select_related = ('panchayath',)
    ordering = ('panchayath__name', 'name')


@admin.register(Panchayath)
class PanchayathAdmin(admin.ModelAdmin):
    list_display = ('name', 'number_of_wards', 'created_at')
    search_fields = ('name',)
    ordering = ('name',)


@admin.register(Coordinator)
class CoordinatorAdmin(AgentAdmin):
    list_display = AgentAdmin.list_display + ('rating',)
    list_filter = ('panchayath', 'rating')


@admin.register(Supervisor)
class SupervisorAdmin(AgentAdmin):
    list_display = AgentAdmin.list_display + ('coordinator',)
    raw_id_fields = ('coordinator',)


@admin.register(GroupLeader)
class GroupLeaderAdmin(AgentAdmin):
    list_display = AgentAdmin.list_display + ('supervisor',)
    raw_id_fields = ('supervisor',)


@admin.register(Pro)
class ProAdmin(AgentAdmin):
    list_display = AgentAdmin.list_display + ('group_leader',)
    raw_id_fields = ('group_leader',)


@admin.register(Customer)
class CustomerAdmin(AgentAdmin):
    list_display = AgentAdmin.list_display + ('pro', 'customer_count')
    raw_id_fields = ('pro',)
