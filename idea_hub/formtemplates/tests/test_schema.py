import pytest

from idea_hub.formtemplates.defaults import DEFAULT_TEMPLATE
from idea_hub.formtemplates.models import FormTemplate
from idea_hub.formtemplates.schema import DynamicDataError
from idea_hub.formtemplates.schema import TemplateSchemaError
from idea_hub.formtemplates.schema import validate_dynamic_data
from idea_hub.formtemplates.schema import validate_fields
from idea_hub.formtemplates.schema import validate_rating_config


@pytest.fixture
def default_template():
    return FormTemplate(id="default-1", fields=DEFAULT_TEMPLATE["fields"])


def test_validate_fields_normalizes_types_and_ids():
    fields = validate_fields(
        [
            {"label": "Estimated Cost", "type": "number"},
            {"id": "size", "type": "Dropdown", "options": ["S", "L"]},
        ]
    )
    assert fields[0]["id"] == "estimated_cost"
    assert fields[0]["required"] is False
    assert fields[1]["type"] == "select"


@pytest.mark.parametrize(
    "fields",
    [
        "not a list",
        [{"id": "a", "type": "color"}],
        [{"id": "a", "type": "select"}],
        [{"id": "a", "type": "text"}, {"id": "a", "type": "text"}],
        [{"type": "text"}],
    ],
)
def test_validate_fields_rejects(fields):
    with pytest.raises(TemplateSchemaError):
        validate_fields(fields)


def test_validate_rating_config():
    config = validate_rating_config([{"name": "Speed", "weight": 2}])
    assert config[0]["id"] == "speed"
    with pytest.raises(TemplateSchemaError):
        validate_rating_config([{"id": "a", "weight": 0}])
    with pytest.raises(TemplateSchemaError):
        validate_rating_config({"id": "a"})


def test_required_answers(default_template):
    with pytest.raises(DynamicDataError) as excinfo:
        validate_dynamic_data(default_template, {"benefits": "  "})
    assert set(excinfo.value.errors) == {"benefits", "feasibility"}
    # drafts may be incomplete
    assert validate_dynamic_data(default_template, {}, partial=True) == {}


def test_answers_are_coerced(default_template):
    cleaned = validate_dynamic_data(
        default_template,
        {"benefits": "Saves time", "feasibility": "Easy", "collab": "yes", "x": 1},
    )
    assert cleaned["collab"] is True
    assert cleaned["x"] == 1


def test_select_must_match_option(default_template):
    with pytest.raises(DynamicDataError) as excinfo:
        validate_dynamic_data(
            default_template, {"benefits": "b", "feasibility": "Trivial"}
        )
    assert "feasibility" in excinfo.value.errors


def test_number_fields():
    template = FormTemplate(
        id="n", fields=[{"id": "cost", "type": "number", "required": True}]
    )
    assert validate_dynamic_data(template, {"cost": "1500"}) == {"cost": 1500}
    assert validate_dynamic_data(template, {"cost": "2.5"}) == {"cost": 2.5}
    with pytest.raises(DynamicDataError):
        validate_dynamic_data(template, {"cost": "lots"})


def test_without_template_anything_goes():
    assert validate_dynamic_data(None, {"free": "form"}) == {"free": "form"}
    with pytest.raises(DynamicDataError):
        validate_dynamic_data(None, ["not", "a", "dict"])
