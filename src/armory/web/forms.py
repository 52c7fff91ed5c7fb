"""Reading submitted forms into the shapes the pipeline and job params expect."""

import re
from typing import Any

from fastapi import Request

PLUGIN_PARAM_FIELD = re.compile(r"params\[([^\]]+)\]")

FormFields = dict[str, str | list[str]]


async def read_form(request: Request) -> FormFields:
    """All text fields of the request form.

    A field submitted once maps to its string; a repeated field maps to
    the list of its values. File uploads are ignored.
    """
    form = await request.form()
    fields: FormFields = {}
    for key in dict.fromkeys(form.keys()):
        values = [v for v in form.getlist(key) if isinstance(v, str)]
        if not values:
            continue
        fields[key] = values[0] if len(values) == 1 else values
    return fields


def plugin_params(fields: FormFields) -> FormFields:
    """Extract ``params[<name>]`` fields keyed by param name."""
    params: FormFields = {}
    for key, value in fields.items():
        match = PLUGIN_PARAM_FIELD.fullmatch(key)
        if match is not None:
            params[match.group(1)] = value
    return params


def single(fields: FormFields, name: str, default: str = "") -> str:
    """The last submitted value of a field (scalar form fields)."""
    value: Any = fields.get(name, default)
    if isinstance(value, list):
        return value[-1] if value else default
    return value
