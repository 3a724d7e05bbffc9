# apps/accounts/forms.py

from django import forms
from django.contrib.auth import authenticate
from .models import User


class LoginForm(forms.Form):
    """Login form for dashboard operators"""

    username = forms.CharField(
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Username or Email'
        })
    )

    password = forms.CharField(
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': 'Password'
        })
    )

    remember_me = forms.BooleanField(
        required=False,
        widget=forms.CheckboxInput(attrs={
            'class': 'form-check-input'
        })
    )

    def clean(self):
        cleaned_data = super().clean()
        username = cleaned_data.get('username')
        password = cleaned_data.get('password')

        if username and password:
            if '@' in username:
                # Email is not unique; take the account the password belongs to
                user = None
                for account in User.objects.filter(email__iexact=username).order_by('date_joined'):
                    user = authenticate(username=account.username, password=password)
                    if user is not None:
                        break
            else:
                user = authenticate(username=username, password=password)

            if user is None:
                raise forms.ValidationError("Invalid username or password")

            if not user.is_active:
                raise forms.ValidationError("This account has been deactivated")

            cleaned_data['user'] = user

        return cleaned_data
