"""
Shared helpers for the API route modules.
"""

from datetime import date

from flask import abort, jsonify, request
from wtforms.validators import InputRequired
from werkzeug.datastructures import MultiDict

from error_handler import ValidationFailed
from storage import as_date


def _form_value(value):
    # WTForms fields parse strings; booleans stay as-is for BooleanField
    return value if isinstance(value, bool) else str(value)


def _is_required(field):
    return any(isinstance(v, InputRequired) for v in field.validators)


def load_payload(form_class, partial=False):
    """
    Validate the JSON body against `form_class` and return the cleaned data.

    With partial=True only the fields present in the body are validated and
    returned, which is how updates merge into an existing record. A JSON null
    clears an optional field.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationFailed({}, 'Request body must be a JSON object')

    formdata = MultiDict({k: _form_value(v) for k, v in payload.items() if v is not None})
    form = form_class(formdata=formdata)

    if partial:
        fields = [field for field in form if field.name in payload]
        errors = {}
        for field in fields:
            if payload[field.name] is None:
                if _is_required(field):
                    errors[field.name] = ['This field is required.']
            elif not field.validate(form):
                errors[field.name] = field.errors
        if not fields:
            raise ValidationFailed({}, 'No updatable fields in request')
    else:
        fields = list(form)
        errors = {} if form.validate() else form.errors

    if errors:
        raise ValidationFailed(errors)

    data = {}
    for field in fields:
        if field.name in payload:
            data[field.name] = None if payload[field.name] is None else field.data
        elif field.data is not None:
            # Absent fields otherwise keep the record's defaults
            data[field.name] = field.data
    return data


def get_or_404(record, label):
    if record is None:
        abort(404, description=f"{label} not found")
    return record


def jsonify_record(record, status_code=200):
    return jsonify(record.to_dict()), status_code


def jsonify_records(records):
    return jsonify([record.to_dict() for record in records])


def deleted_or_404(deleted, label):
    if not deleted:
        abort(404, description=f"{label} not found")
    return '', 204


def date_arg(name='date'):
    """The ?date=YYYY-MM-DD query argument, defaulting to today."""
    value = request.args.get(name)
    if not value:
        return date.today()
    try:
        return as_date(value)
    except ValueError:
        abort(400, description=f"Invalid {name}: expected YYYY-MM-DD")
