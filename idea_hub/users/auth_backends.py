from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from django.db.models import Q


class UsernameOrEmailBackend(ModelBackend):
    """Log in with either handle; only ACTIVE accounts get through.

    Registrations start PENDING until an admin approves them, and REJECTED
    accounts stay locked out.
    """

    def authenticate(self, request, username=None, password=None, **kwargs):
        model = get_user_model()
        login = username or kwargs.get(model.USERNAME_FIELD) or kwargs.get("email")
        if not login or password is None:
            return None
        # an email match wins over a username that happens to look like one
        candidates = sorted(
            model.objects.filter(Q(email__iexact=login) | Q(username__iexact=login)),
            key=lambda u: u.email.lower() != login.lower(),
        )
        if not candidates:
            # same hashing cost as a real check
            model().set_password(password)
            return None
        user = candidates[0]
        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None

    def user_can_authenticate(self, user):
        if getattr(user, "status", user.Status.ACTIVE) != user.Status.ACTIVE:
            return False
        return super().user_can_authenticate(user)
