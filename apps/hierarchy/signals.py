# apps/hierarchy/signals.py

from django.db.models.signals import post_init, post_save, post_delete
from django.dispatch import Signal, receiver

from .cache import invalidate_unit_caches
from .models import Panchayath, Coordinator, Supervisor, GroupLeader, Pro, Customer

# Sent by HierarchyService after every successful create/update/delete.
# Arguments: role (Role or None for a panchayath), unit_id
mutation_succeeded = Signal()


@receiver(mutation_succeeded)
def handle_mutation_succeeded(sender, role=None, unit_id=None, **kwargs):
    """Invalidate cached counts and drill-down lists for the unit"""
    invalidate_unit_caches(unit_id)


@receiver(post_save, sender=Panchayath)
@receiver(post_delete, sender=Panchayath)
def handle_panchayath_change(sender, instance, **kwargs):
    invalidate_unit_caches(instance.pk)


def remember_agent_unit(sender, instance, **kwargs):
    """Record the unit an agent was loaded with, so a move refreshes both units"""
    # Deferred when loaded with only()/defer()
    instance._loaded_panchayath_id = instance.__dict__.get('panchayath_id')


def handle_agent_change(sender, instance, **kwargs):
    """Keep counts right for writes that bypass the service (admin site, cascades)"""
    previous_unit_id = getattr(instance, '_loaded_panchayath_id', None)
    if previous_unit_id and previous_unit_id != instance.panchayath_id:
        invalidate_unit_caches(previous_unit_id)
    invalidate_unit_caches(instance.panchayath_id)
    instance._loaded_panchayath_id = instance.panchayath_id


for agent_model in (Coordinator, Supervisor, GroupLeader, Pro, Customer):
    post_init.connect(remember_agent_unit, sender=agent_model, dispatch_uid=f'hierarchy_init_{agent_model.__name__}')
    post_save.connect(handle_agent_change, sender=agent_model, dispatch_uid=f'hierarchy_save_{agent_model.__name__}')
    post_delete.connect(handle_agent_change, sender=agent_model, dispatch_uid=f'hierarchy_delete_{agent_model.__name__}')
