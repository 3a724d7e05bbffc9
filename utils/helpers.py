# utils/helpers.py

from django.utils.http import url_has_allowed_host_and_scheme


def get_next_url(request, fallback):
    """Return the ``next`` parameter if it points back into this site, else ``fallback``"""
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(
        next_url,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure()
    ):
        return next_url
    return fallback
