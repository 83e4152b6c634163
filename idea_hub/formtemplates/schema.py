"""Validation for template authoring and for the answers ideas carry."""

from __future__ import annotations

from typing import Any

from django.utils.text import slugify

FIELD_TYPES = {"text", "textarea", "select", "checkbox", "number"}

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off", ""}


class TemplateSchemaError(ValueError):
    """Raised when a template's fields or rating config are malformed."""


class DynamicDataError(ValueError):
    """Raised when idea answers do not satisfy their template.

    ``errors`` maps field id to a human-readable message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


def _ensure_id(item: dict, key: str) -> str:
    if not item.get("id"):
        item["id"] = slugify(str(item.get(key) or "")).replace("-", "_")
    if not item["id"]:
        msg = f"every entry needs an id or a {key}"
        raise TemplateSchemaError(msg)
    return str(item["id"])


def validate_fields(fields: Any) -> list[dict]:
    if not isinstance(fields, list):
        msg = "fields must be an array"
        raise TemplateSchemaError(msg)
    seen: set[str] = set()
    for item in fields:
        if not isinstance(item, dict):
            msg = "fields items must be objects"
            raise TemplateSchemaError(msg)
        fid = _ensure_id(item, "label")
        if fid in seen:
            msg = f"duplicate field id: {fid}"
            raise TemplateSchemaError(msg)
        seen.add(fid)
        ftype = str(item.get("type") or "").lower()
        # Older builders saved selects as "dropdown"
        if ftype == "dropdown":
            ftype = "select"
        if ftype not in FIELD_TYPES:
            msg = f"Unsupported field type: {ftype}"
            raise TemplateSchemaError(msg)
        item["type"] = ftype
        item["required"] = bool(item.get("required", False))
        if ftype == "select":
            opts = item.get("options")
            if not opts or not isinstance(opts, list):
                msg = f"select field {fid} must have options"
                raise TemplateSchemaError(msg)
    return fields


def validate_rating_config(config: Any) -> list[dict]:
    if not isinstance(config, list):
        msg = "rating_config must be an array"
        raise TemplateSchemaError(msg)
    seen: set[str] = set()
    for item in config:
        if not isinstance(item, dict):
            msg = "rating_config items must be objects"
            raise TemplateSchemaError(msg)
        did = _ensure_id(item, "name")
        if did in seen:
            msg = f"duplicate dimension id: {did}"
            raise TemplateSchemaError(msg)
        seen.add(did)
        try:
            weight = float(item.get("weight"))
        except (TypeError, ValueError):
            weight = 0
        if weight <= 0:
            msg = f"dimension {did} must have a positive weight"
            raise TemplateSchemaError(msg)
        item.setdefault("name", did)
        item.setdefault("description", "")
    return config


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce_checkbox(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def _coerce_number(value: Any) -> float | int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    return int(number) if number.is_integer() else number


def validate_dynamic_data(  # noqa: C901, PLR0912
    template, data: Any, *, partial: bool = False
) -> dict[str, Any]:
    """Check ``data`` against ``template.fields`` and return a cleaned copy.

    With no template nothing is validated. Keys that the template does not
    declare are kept as-is. ``partial`` skips the required-field check, for
    drafts that are still being written.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DynamicDataError({"dynamic_data": "must be an object"})
    cleaned = dict(data)
    if template is None:
        return cleaned

    errors: dict[str, str] = {}
    for field in template.fields or []:
        if not isinstance(field, dict) or not field.get("id"):
            continue
        fid = str(field["id"])
        ftype = str(field.get("type") or "text").lower()
        value = cleaned.get(fid)

        if ftype == "checkbox":
            coerced = None if value is None else _coerce_checkbox(value)
            if value is not None and coerced is None:
                errors[fid] = "must be true or false"
            elif coerced is not None:
                cleaned[fid] = coerced
            missing = field.get("required") and not partial and not coerced
            if missing and fid not in errors:
                errors[fid] = "This field is required."
            continue

        if _is_empty(value):
            if field.get("required") and not partial:
                errors[fid] = "This field is required."
            continue

        if ftype in {"select", "dropdown"}:
            options = [str(o) for o in field.get("options") or []]
            if str(value) not in options:
                errors[fid] = f"must be one of: {', '.join(options)}"
        elif ftype == "number":
            number = _coerce_number(value)
            if number is None:
                errors[fid] = "must be a number"
            else:
                cleaned[fid] = number

    if errors:
        raise DynamicDataError(errors)
    return cleaned
