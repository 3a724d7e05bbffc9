# apps/accounts/views.py

from django.shortcuts import render, redirect
from django.contrib.auth import login, logout
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.urls import reverse
from django.views import View

from utils.helpers import get_next_url

from .forms import LoginForm


def is_admin(user):
    """Check if user is admin (superusers are always admins)"""
    return user.is_authenticated and (user.is_superuser or user.user_type == 'admin')


class LoginView(View):
    """Login for dashboard operators"""

    def get(self, request):
        if request.user.is_authenticated:
            return redirect('dashboard')

        form = LoginForm()
        return render(request, 'accounts/login.html', {'form': form})

    def post(self, request):
        form = LoginForm(request.POST)

        if form.is_valid():
            user = form.cleaned_data['user']
            login(request, user)

            # Remember me functionality
            if not form.cleaned_data.get('remember_me'):
                request.session.set_expiry(0)

            messages.success(request, f'Welcome back, {user.username}!')
            return redirect(get_next_url(request, reverse('dashboard')))

        return render(request, 'accounts/login.html', {'form': form})


def logout_view(request):
    """Logout view"""
    logout(request)
    messages.success(request, 'You have been logged out successfully.')
    return redirect('login')


@login_required
def dashboard_view(request):
    """Send admins to the hierarchy browser and officers to agent management"""
    if is_admin(request.user):
        return redirect('hierarchy_browser')
    return redirect('hierarchy_editor')
