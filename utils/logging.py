# utils/logging.py

import logging
from django.core.mail import mail_admins
from django.utils import timezone

logger = logging.getLogger('panchayath')


class ErrorNotificationHandler(logging.Handler):
    """Send email to admins on errors"""

    def emit(self, record):
        if record.levelno >= logging.ERROR:
            subject = f"Hierarchy Dashboard Error: {record.getMessage()}"
            message = self.format(record)
            mail_admins(subject, message, fail_silently=True)


def log_user_action(user, action, details=None):
    """Log user actions for audit trail"""
    logger.info(f"User {user.username} performed {action}", extra={
        'user_id': str(user.pk),
        'action': action,
        'details': details,
        'timestamp': timezone.now()
    })
