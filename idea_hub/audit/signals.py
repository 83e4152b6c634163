from django.contrib.auth.signals import user_logged_in
from django.contrib.auth.signals import user_login_failed
from django.dispatch import receiver

from .utils import client_ip
from .utils import log_action


@receiver(user_logged_in)
def on_user_logged_in(sender, request, user, **kwargs):
    ip = client_ip(request)
    log_action(
        "auth.login",
        actor=user,
        model_name="User",
        record_id=user.pk,
        ip_address=ip,
    )


@receiver(user_login_failed)
def on_user_login_failed(sender, credentials, request=None, **kwargs):
    # credentials arrive with the password already scrubbed
    attempted = credentials.get("username") or credentials.get("email") or ""
    log_action(
        "auth.login_failed",
        message=f"username={attempted}",
        model_name="User",
        ip_address=client_ip(request),
    )
