import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import uuid


def agent_fields():
    return [
        ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ('name', models.CharField(max_length=150)),
        ('mobile_number', models.CharField(max_length=16, validators=[django.core.validators.RegexValidator('^\\+?\\d{10,15}$', 'Enter a valid mobile number (10 to 15 digits, optional leading +).')])),
        ('ward', models.PositiveIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(1)])),
        ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
        ('updated_at', models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Panchayath',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=150, unique=True)),
                ('number_of_wards', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Coordinator',
            fields=agent_fields() + [
                ('rating', models.PositiveSmallIntegerField(default=3, help_text='Rating 1-5', validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('panchayath', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='coordinators', to='hierarchy.panchayath')),
            ],
            options={
                'ordering': ['name'],
                'abstract': False,
                'indexes': [models.Index(fields=['panchayath', 'name'], name='coordinator_unit_name_idx')],
            },
        ),
        migrations.CreateModel(
            name='Supervisor',
            fields=agent_fields() + [
                ('panchayath', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='supervisors', to='hierarchy.panchayath')),
                ('coordinator', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='supervisors', to='hierarchy.coordinator')),
            ],
            options={
                'ordering': ['name'],
                'abstract': False,
                'indexes': [models.Index(fields=['panchayath', 'name'], name='supervisor_unit_name_idx')],
            },
        ),
        migrations.CreateModel(
            name='GroupLeader',
            fields=agent_fields() + [
                ('panchayath', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='group_leaders', to='hierarchy.panchayath')),
                ('supervisor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='group_leaders', to='hierarchy.supervisor')),
            ],
            options={
                'ordering': ['name'],
                'abstract': False,
                'indexes': [models.Index(fields=['panchayath', 'name'], name='group_leader_unit_name_idx')],
                'constraints': [models.UniqueConstraint(fields=('panchayath', 'ward'), name='unique_group_leader_per_ward', violation_error_message='This ward already has a group leader.')],
            },
        ),
        migrations.CreateModel(
            name='Pro',
            fields=agent_fields() + [
                ('panchayath', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='pros', to='hierarchy.panchayath')),
                ('group_leader', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='pros', to='hierarchy.groupleader')),
            ],
            options={
                'verbose_name': 'PRO',
                'verbose_name_plural': 'PROs',
                'ordering': ['name'],
                'abstract': False,
                'indexes': [models.Index(fields=['panchayath', 'name'], name='pro_unit_name_idx')],
            },
        ),
        migrations.CreateModel(
            name='Customer',
            fields=agent_fields() + [
                ('customer_count', models.PositiveIntegerField(default=0)),
                ('panchayath', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='customers', to='hierarchy.panchayath')),
                ('pro', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='customers', to='hierarchy.pro')),
            ],
            options={
                'ordering': ['name'],
                'abstract': False,
                'indexes': [models.Index(fields=['panchayath', 'name'], name='customer_unit_name_idx')],
            },
        ),
    ]
