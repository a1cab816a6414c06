import json
import logging
import os

from docker.utils.ports import split_port
from jsonschema import Draft4Validator
from jsonschema import FormatChecker
from jsonschema import ValidationError

from ..config.errors import InvalidComposeFile


log = logging.getLogger(__name__)

SCHEMA_FILENAME = 'config_schema_v2.json'

format_checker = FormatChecker()


@format_checker.checks('ports', raises=ValidationError)
def format_ports(instance):
    try:
        split_port(instance)
    except ValueError as e:
        raise ValidationError(str(e))
    return True


def anglicize_json_type(json_type):
    if json_type.startswith(('a', 'e', 'i', 'o', 'u')):
        return 'an ' + json_type
    return 'a ' + json_type


def path_string(path):
    return ".".join(c for c in path if isinstance(c, str))


def json_value(instance):
    return json.dumps(instance, default=str)


def _parse_valid_types_from_validator(validator):
    """A validator value can be either an array of valid types or a string of
    a valid type. Parse the valid types and prefix with the correct article.
    """
    if not isinstance(validator, list):
        return anglicize_json_type(validator)

    if len(validator) == 1:
        return anglicize_json_type(validator[0])

    return "{}, or {}".format(
        ", ".join([anglicize_json_type(validator[0])] + validator[1:-1]),
        anglicize_json_type(validator[-1]))


def _parse_oneof_validator(error):
    types = []
    for context in error.context:
        if context.validator == 'oneOf':
            _, error_msg = _parse_oneof_validator(context)
            return path_string(context.path), error_msg

        if context.validator == 'required':
            return (None, context.message)

        if context.path:
            return (
                path_string(context.path),
                "contains {}, which is an invalid type, it should be {}".format(
                    json_value(context.instance),
                    _parse_valid_types_from_validator(context.validator_value)),
            )

        if context.validator == 'type':
            types.append(context.validator_value)

    flattened = []
    for t in types:
        flattened.extend(t if isinstance(t, list) else [t])
    valid_types = _parse_valid_types_from_validator(flattened)
    return (None, "contains {}, which is an invalid type, it should be {}".format(
        json_value(error.instance), valid_types))


def process_service_errors(error):
    # error.path is ('services', <service name>, <key>, ...)
    path = list(error.path)[1:]
    msg_format = None
    error_msg = error.message

    if error.validator == 'oneOf':
        msg_format = "{path} {msg}"
        config_key, error_msg = _parse_oneof_validator(error)
        if config_key:
            path.append(config_key)

    elif error.validator == 'type':
        msg_format = "{path} contains {value}, which is an invalid type, it should be {msg}"
        error_msg = _parse_valid_types_from_validator(error.validator_value)

    elif error.validator == 'required':
        error_msg = ", ".join(error.validator_value)
        msg_format = "{path} is invalid, {msg} is required."

    elif error.cause:
        error_msg = str(error.cause)
        msg_format = "{path} contains {value}, which is invalid: {msg}"

    elif error.path:
        msg_format = "{path} value {msg}"

    if msg_format:
        return msg_format.format(
            path=path_string(path), value=json_value(error.instance), msg=error_msg)

    return error.message


def load_jsonschema():
    filename = os.path.join(
        os.path.dirname(os.path.abspath(__file__)), SCHEMA_FILENAME)
    with open(filename, "r") as fh:
        return json.load(fh)


def handle_errors(errors, format_error_func, filename):
    errors = list(sorted(errors, key=str))
    if not errors:
        return

    raise InvalidComposeFile(filename, [format_error_func(error) for error in errors])


def validate_services(services, filename=None):
    """Check the type of every recognized key of every service. Keys the
    schema doesn't know are let through.
    """
    validator = Draft4Validator(load_jsonschema(), format_checker=format_checker)
    handle_errors(
        validator.iter_errors({'services': services.unwrap()}),
        process_service_errors,
        filename)
