# apps/hierarchy/models.py
"""
Panchayaths and the agent roles that staff them.

Roles are separate tables rather than a tagged union: an agent's role is
the model it lives in. Every agent belongs to exactly one panchayath and
is removed with it.
"""

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator, RegexValidator
from django.utils import timezone
import uuid


mobile_number_validator = RegexValidator(
    r'^\+?\d{10,15}$',
    'Enter a valid mobile number (10 to 15 digits, optional leading +).'
)

# Annotations added by the unit list query, one per counted role
UNIT_COUNT_FIELDS = ('coordinator_count', 'supervisor_count', 'group_leader_count', 'pro_count')


class Panchayath(models.Model):
    """A regional administrative area, the top of the hierarchy"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150, unique=True)
    number_of_wards = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def total_agents(self):
        """Sum of the role counts annotated by the unit list query"""
        return sum(getattr(self, field, 0) or 0 for field in UNIT_COUNT_FIELDS)


class Agent(models.Model):
    """Fields shared by every role"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150)
    mobile_number = models.CharField(max_length=16, validators=[mobile_number_validator])
    ward = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['name']

    def __str__(self):
        return self.name


class Coordinator(Agent):
    panchayath = models.ForeignKey(Panchayath, on_delete=models.CASCADE, related_name='coordinators')
    rating = models.PositiveSmallIntegerField(
        default=3,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text="Rating 1-5"
    )

    class Meta(Agent.Meta):
        indexes = [
            models.Index(fields=['panchayath', 'name'], name='coordinator_unit_name_idx'),
        ]


class Supervisor(Agent):
    panchayath = models.ForeignKey(Panchayath, on_delete=models.CASCADE, related_name='supervisors')
    coordinator = models.ForeignKey(
        Coordinator,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='supervisors'
    )

    class Meta(Agent.Meta):
        indexes = [
            models.Index(fields=['panchayath', 'name'], name='supervisor_unit_name_idx'),
        ]


class GroupLeader(Agent):
    panchayath = models.ForeignKey(Panchayath, on_delete=models.CASCADE, related_name='group_leaders')
    supervisor = models.ForeignKey(
        Supervisor,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='group_leaders'
    )

    class Meta(Agent.Meta):
        indexes = [
            models.Index(fields=['panchayath', 'name'], name='group_leader_unit_name_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['panchayath', 'ward'],
                name='unique_group_leader_per_ward',
                violation_error_message='This ward already has a group leader.'
            ),
        ]


class Pro(Agent):
    """Public Relations Officer working under a group leader"""

    panchayath = models.ForeignKey(Panchayath, on_delete=models.CASCADE, related_name='pros')
    group_leader = models.ForeignKey(
        GroupLeader,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='pros'
    )

    class Meta(Agent.Meta):
        verbose_name = 'PRO'
        verbose_name_plural = 'PROs'
        indexes = [
            models.Index(fields=['panchayath', 'name'], name='pro_unit_name_idx'),
        ]


class Customer(Agent):
    """Customers tracked against a PRO; not counted in the staffing roll-up"""

    panchayath = models.ForeignKey(Panchayath, on_delete=models.CASCADE, related_name='customers')
    pro = models.ForeignKey(
        Pro,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='customers'
    )
    customer_count = models.PositiveIntegerField(default=0)

    class Meta(Agent.Meta):
        indexes = [
            models.Index(fields=['panchayath', 'name'], name='customer_unit_name_idx'),
        ]
