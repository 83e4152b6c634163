import logging

from celery import shared_task

from idea_hub.ideas import assistant
from idea_hub.ideas.models import Idea

logger = logging.getLogger(__name__)


@shared_task(name="ideas.check_duplicate")
def check_duplicate(idea_id: str) -> dict | None:
    """Ask the content assistant whether an idea repeats an existing one.

    Stores the flag on the idea when a match is found. Failures leave the
    idea untouched.
    """
    idea = Idea.objects.filter(pk=idea_id).first()
    if idea is None:
        return None
    candidates = (
        Idea.objects.exclude(pk=idea.pk)
        .exclude(status=Idea.Status.DRAFT)
        .only("id", "title", "description")
        .order_by("-created_at")[: assistant.MAX_DUPLICATE_CANDIDATES]
    )
    flag = assistant.find_duplicate(idea, candidates)
    if flag is None:
        return None
    # update() keeps updated_at and skips the status signals
    Idea.objects.filter(pk=idea.pk).update(duplicate_flag=flag)
    logger.info("Idea %s may duplicate %s", idea.pk, flag["match_id"])
    return flag
