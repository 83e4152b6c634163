import logging
from functools import partial

from django.db.models.signals import post_save
from django.db.models.signals import pre_save
from django.db.transaction import on_commit
from django.dispatch import receiver

from idea_hub.notifications.models import Notification
from idea_hub.notifications.services import notify
from idea_hub.notifications.services import reviewers

from .models import Idea

logger = logging.getLogger(__name__)

STATUS_NOTIFICATION_TYPES = {
    Idea.Status.APPROVED: Notification.Type.APPROVAL,
    Idea.Status.REJECTED: Notification.Type.REJECTION,
    Idea.Status.NEEDS_REVISION: Notification.Type.REVISION,
    Idea.Status.PUBLISHED: Notification.Type.PUBLISHED,
}


@receiver(pre_save, sender=Idea)
def store_old_status(sender, instance, **kwargs):
    instance._old_status = (  # noqa: SLF001
        Idea.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
    )


def _enqueue_duplicate_check(idea_id: str) -> None:
    from idea_hub.ideas.tasks import check_duplicate  # noqa: PLC0415

    # runs after commit; a broker outage must not fail the submission
    try:
        check_duplicate.delay(idea_id)
    except Exception:  # noqa: BLE001
        logger.warning(
            "Could not queue duplicate check for idea %s", idea_id, exc_info=True
        )


def _schedule_duplicate_check(idea_id: str) -> None:
    on_commit(partial(_enqueue_duplicate_check, idea_id))


@receiver(post_save, sender=Idea)
def idea_status_notifications(sender, instance, created, **kwargs):
    old_status = getattr(instance, "_old_status", None)
    if old_status == instance.status:
        return
    link = f"/ideas/{instance.pk}/"

    if instance.status == Idea.Status.SUBMITTED:
        notify(
            reviewers(),
            title="New idea submitted",
            message=f'{instance.author_name} submitted "{instance.title}".',
            notification_type=Notification.Type.IDEA_SUBMITTED,
            related_link=link,
            exclude=instance.author,
        )
        _schedule_duplicate_check(str(instance.pk))
        return

    notification_type = STATUS_NOTIFICATION_TYPES.get(instance.status)
    if notification_type is None or created or instance.author is None:
        return
    logger.debug("Notifying author of %s: %s", instance.pk, instance.status)
    notify(
        [instance.author],
        title=f"Idea {instance.get_status_display()}",
        message=(
            f'Your idea "{instance.title}" is now '
            f"{instance.get_status_display()}."
        ),
        notification_type=notification_type,
        related_link=link,
    )
