from idea_hub.formtemplates.dimensions import DEFAULT_RATING_DIMENSIONS
from idea_hub.formtemplates.dimensions import RatingDimension
from idea_hub.formtemplates.dimensions import coerce_dimensions
from idea_hub.formtemplates.dimensions import resolve_dimensions
from idea_hub.formtemplates.models import FormTemplate
from idea_hub.ideas.models import Idea


def template(**kwargs):
    kwargs.setdefault("id", "t1")
    kwargs.setdefault("name", "T1")
    kwargs.setdefault("is_active", True)
    return FormTemplate(**kwargs)


def test_default_rubric_weights_sum_to_one_hundred():
    assert sum(d.weight for d in DEFAULT_RATING_DIMENSIONS) == 100
    assert [d.id for d in DEFAULT_RATING_DIMENSIONS] == [
        "impact",
        "feasibility",
        "roi",
        "innovation",
        "risk",
    ]


def test_no_template_uses_default():
    assert resolve_dimensions(Idea(title="x"), []) == list(DEFAULT_RATING_DIMENSIONS)


def test_template_rubric_keeps_order():
    config = [
        {"id": "speed", "name": "Speed", "weight": 2},
        {"id": "cost", "name": "Cost", "weight": 1, "description": "cheap"},
    ]
    dims = resolve_dimensions(
        Idea(title="x", template_id="t1"), [template(rating_config=config)]
    )
    assert dims == [
        RatingDimension("speed", "Speed", 2.0),
        RatingDimension("cost", "Cost", 1.0, "cheap"),
    ]


def test_fallbacks():
    idea = Idea(title="x", template_id="t1")
    # deleted template
    assert resolve_dimensions(idea, []) == list(DEFAULT_RATING_DIMENSIONS)
    # inactive template
    inactive = template(is_active=False, rating_config=[{"id": "a", "weight": 1}])
    assert resolve_dimensions(idea, [inactive]) == list(DEFAULT_RATING_DIMENSIONS)
    # empty rubric
    assert resolve_dimensions(idea, [template(rating_config=[])]) == list(
        DEFAULT_RATING_DIMENSIONS
    )


def test_coerce_drops_unusable_entries():
    dims = coerce_dimensions(
        [
            {"id": "ok", "weight": "3"},
            {"id": "", "weight": 1},
            {"id": "zero", "weight": 0},
            {"id": "bad", "weight": "heavy"},
            "junk",
        ]
    )
    assert dims == [RatingDimension("ok", "ok", 3.0)]
    assert coerce_dimensions(None) == []
