# apps/hierarchy/forms.py

from django import forms
from .models import Panchayath, Coordinator, Supervisor, GroupLeader, Pro, Customer


class PanchayathForm(forms.ModelForm):
    class Meta:
        model = Panchayath
        fields = ['name', 'number_of_wards']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Enter panchayath name'}),
            'number_of_wards': forms.NumberInput(attrs={'class': 'form-control', 'min': '1'}),
        }

    def clean_name(self):
        name = self.cleaned_data['name'].strip()
        duplicates = Panchayath.objects.filter(name__iexact=name)
        if self.instance.pk:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise forms.ValidationError('A panchayath with this name already exists.')
        return name


AGENT_WIDGETS = {
    'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Full name'}),
    'mobile_number': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Mobile number'}),
    'ward': forms.NumberInput(attrs={'class': 'form-control', 'min': '1', 'placeholder': 'Ward (optional)'}),
    'panchayath': forms.Select(attrs={'class': 'form-select'}),
}


class AgentForm(forms.ModelForm):
    """
    Base form for every role.

    Pass ``panchayath`` to pre-select the unit and to limit the
    supervising-agent choices to agents of that unit.
    """

    # Name of the FK to the supervising agent, if the role has one
    parent_field = None

    def __init__(self, *args, panchayath=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['panchayath'].empty_label = 'Select a panchayath'

        if panchayath is None and self.instance.panchayath_id:
            panchayath = self.instance.panchayath

        if panchayath is not None:
            self.fields['panchayath'].initial = panchayath.pk
            if self.parent_field:
                parent = self.fields[self.parent_field]
                parent.queryset = parent.queryset.filter(panchayath=panchayath)

    def clean_name(self):
        return self.cleaned_data['name'].strip()

    def clean(self):
        cleaned_data = super().clean()
        panchayath = cleaned_data.get('panchayath')
        ward = cleaned_data.get('ward')

        if panchayath and ward and ward > panchayath.number_of_wards:
            self.add_error('ward', f'{panchayath.name} only has {panchayath.number_of_wards} wards.')

        if self.parent_field:
            parent = cleaned_data.get(self.parent_field)
            if parent and panchayath and parent.panchayath_id != panchayath.pk:
                self.add_error(self.parent_field, 'Must belong to the same panchayath.')

        return cleaned_data


class CoordinatorForm(AgentForm):
    class Meta:
        model = Coordinator
        fields = ['name', 'mobile_number', 'panchayath', 'ward', 'rating']
        widgets = dict(AGENT_WIDGETS, rating=forms.NumberInput(attrs={'class': 'form-control', 'min': '1', 'max': '5'}))


class SupervisorForm(AgentForm):
    parent_field = 'coordinator'

    class Meta:
        model = Supervisor
        fields = ['name', 'mobile_number', 'panchayath', 'ward', 'coordinator']
        widgets = dict(AGENT_WIDGETS, coordinator=forms.Select(attrs={'class': 'form-select'}))


class GroupLeaderForm(AgentForm):
    parent_field = 'supervisor'

    class Meta:
        model = GroupLeader
        fields = ['name', 'mobile_number', 'panchayath', 'ward', 'supervisor']
        widgets = dict(AGENT_WIDGETS, supervisor=forms.Select(attrs={'class': 'form-select'}))

    def clean(self):
        cleaned_data = super().clean()
        panchayath = cleaned_data.get('panchayath')
        ward = cleaned_data.get('ward')

        if panchayath and ward and 'ward' not in self.errors:
            taken = GroupLeader.objects.filter(panchayath=panchayath, ward=ward).exclude(pk=self.instance.pk)
            if taken.exists():
                self.add_error('ward', 'This ward already has a group leader.')

        return cleaned_data


class ProForm(AgentForm):
    parent_field = 'group_leader'

    class Meta:
        model = Pro
        fields = ['name', 'mobile_number', 'panchayath', 'ward', 'group_leader']
        widgets = dict(AGENT_WIDGETS, group_leader=forms.Select(attrs={'class': 'form-select'}))


class CustomerForm(AgentForm):
    parent_field = 'pro'

    class Meta:
        model = Customer
        fields = ['name', 'mobile_number', 'panchayath', 'ward', 'pro', 'customer_count']
        widgets = dict(
            AGENT_WIDGETS,
            pro=forms.Select(attrs={'class': 'form-select'}),
            customer_count=forms.NumberInput(attrs={'class': 'form-control', 'min': '0'}),
        )
