# apps/hierarchy/management/commands/seed_hierarchy.py
"""
Management command to create sample panchayaths with agents of every role
"""

import random

from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.hierarchy.models import Panchayath, Coordinator, Supervisor, GroupLeader, Pro, Customer

User = get_user_model()

PANCHAYATH_NAMES = [
    'Aluva', 'Kalady', 'Perumbavoor', 'Kothamangalam', 'Muvattupuzha',
    'Angamaly', 'Piravom', 'Thodupuzha', 'Kuttanad', 'Chalakudy',
    'Irinjalakuda', 'Kodungallur', 'Vaikom', 'Pala', 'Ettumanoor',
]

FIRST_NAMES = [
    'Anil', 'Bindu', 'Deepa', 'Gopal', 'Hari', 'Jaya', 'Lakshmi', 'Manoj',
    'Nisha', 'Prakash', 'Rajesh', 'Sajitha', 'Suresh', 'Usha', 'Vinod',
]

LAST_NAMES = ['Nair', 'Menon', 'Pillai', 'Kurian', 'Varghese', 'Thomas', 'Das', 'Kumar']


class Command(BaseCommand):
    help = 'Create sample panchayaths with coordinators, supervisors, group leaders, PROs and customers'

    def add_arguments(self, parser):
        parser.add_argument(
            '--panchayaths',
            type=int,
            default=5,
            help='Number of panchayaths to create'
        )
        parser.add_argument(
            '--admin',
            type=str,
            default=None,
            help='Username of an admin user to create if missing'
        )
        parser.add_argument(
            '--password',
            type=str,
            default='admin123',
            help='Password for a newly created admin user'
        )
        parser.add_argument(
            '--seed',
            type=int,
            default=None,
            help='Random seed, for repeatable data'
        )

    def handle(self, *args, **options):
        count = options['panchayaths']
        if count < 1 or count > len(PANCHAYATH_NAMES):
            raise CommandError(f'--panchayaths must be between 1 and {len(PANCHAYATH_NAMES)}')

        self.rng = random.Random(options['seed'])

        if options['admin']:
            self.create_admin(options['admin'], options['password'])

        with transaction.atomic():
            for name in PANCHAYATH_NAMES[:count]:
                panchayath, created = Panchayath.objects.get_or_create(
                    name=name,
                    defaults={'number_of_wards': self.rng.randint(8, 20)}
                )
                if not created:
                    self.stdout.write(self.style.WARNING(f'Panchayath {name} already exists, skipped'))
                    continue

                agents = self.populate(panchayath)
                self.stdout.write(f'Created {name} with {agents} agents')

        self.stdout.write(self.style.SUCCESS('Sample hierarchy created successfully!'))

    def create_admin(self, username, password):
        if User.objects.filter(username=username).exists():
            self.stdout.write(self.style.WARNING(f'User {username} already exists'))
            return

        User.objects.create_superuser(
            username=username,
            email=f'{username}@example.com',
            password=password,
            user_type='admin'
        )
        self.stdout.write(self.style.SUCCESS(f'Created admin user {username}'))

    def person(self):
        name = f'{self.rng.choice(FIRST_NAMES)} {self.rng.choice(LAST_NAMES)}'
        mobile = f'9{self.rng.randint(100000000, 999999999)}'
        return {'name': name, 'mobile_number': mobile}

    def populate(self, panchayath):
        """Create a small tree of agents; returns the number of counted agents"""
        wards = list(range(1, panchayath.number_of_wards + 1))
        self.rng.shuffle(wards)
        created = 0

        coordinators = [
            Coordinator.objects.create(
                panchayath=panchayath,
                ward=self.rng.choice(wards),
                rating=self.rng.randint(1, 5),
                **self.person()
            )
            for _ in range(self.rng.randint(1, 3))
        ]
        created += len(coordinators)

        supervisors = []
        for _ in range(self.rng.randint(1, 4)):
            supervisors.append(Supervisor.objects.create(
                panchayath=panchayath,
                coordinator=self.rng.choice(coordinators),
                **self.person()
            ))
        created += len(supervisors)

        # One group leader per ward, on a subset of wards
        group_leaders = []
        for ward in wards[:self.rng.randint(1, len(wards))]:
            group_leaders.append(GroupLeader.objects.create(
                panchayath=panchayath,
                ward=ward,
                supervisor=self.rng.choice(supervisors),
                **self.person()
            ))
        created += len(group_leaders)

        for group_leader in group_leaders:
            for _ in range(self.rng.randint(0, 2)):
                pro = Pro.objects.create(
                    panchayath=panchayath,
                    ward=group_leader.ward,
                    group_leader=group_leader,
                    **self.person()
                )
                created += 1
                Customer.objects.create(
                    panchayath=panchayath,
                    ward=pro.ward,
                    pro=pro,
                    customer_count=self.rng.randint(5, 60),
                    **self.person()
                )

        return created
