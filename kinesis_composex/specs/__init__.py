#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Load the JSON Schema specification and validate the kinesis-streams configuration against it
"""

import json
from importlib.resources import files

import jsonschema

from kinesis_composex.common.logging import LOG

SPEC_FILE_NAME = "x-kinesis-streams.spec.json"


def load_schema() -> dict:
    source = files("kinesis_composex").joinpath(f"specs/{SPEC_FILE_NAME}")
    return json.loads(source.read_text())


def validate_definition(definition: dict) -> None:
    """
    Validates the kinesis-streams configuration against the JSON schema

    :param dict definition: the kinesis-streams configuration
    :raises: jsonschema.exceptions.ValidationError
    """
    LOG.debug(f"Validating against input schema {SPEC_FILE_NAME}")
    try:
        jsonschema.validate(definition, load_schema())
    except jsonschema.exceptions.ValidationError:
        LOG.error("kinesis-streams - Definition is not conform to schema.")
        raise
