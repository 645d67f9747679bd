# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Module to resolve the effective settings of a stream, from the built-in baseline,
the defaults and the stream own definition.
"""

from __future__ import annotations

import re

from compose_x_common.compose_x_common import keyisset, set_else_none

from kinesis_composex.common import NONALPHANUM, merge_definitions
from kinesis_composex.common.logging import LOG
from kinesis_composex.exceptions import InvalidStreamName, MissingStreamName
from kinesis_composex.kinesis.kinesis_params import BASELINE

SEPARATOR_RE = re.compile(r"[-_.]([a-zA-Z])")


def sanitize_name(name: str) -> str:
    """
    Turns the stream name into a CFN logical ID fragment.
    Separators (``-``, ``_``, ``.``) followed by a letter are removed and the letter uppercased,
    then the first character is uppercased.

    >>> sanitize_name("my-cool.stream")
    'MyCoolStream'

    :param str name:
    :return: the clean name
    :rtype: str
    """
    clean_name = SEPARATOR_RE.sub(lambda match: match.group(1).upper(), name)
    clean_name = clean_name[:1].upper() + clean_name[1:]
    if NONALPHANUM.search(clean_name):
        LOG.warning(
            f"Stream {name} - {clean_name} is not alphanumeric. Removing remaining special characters"
        )
        clean_name = NONALPHANUM.sub("", clean_name)
    return clean_name


class StreamSettings:
    """
    Class to represent the resolved configuration of a stream.

    :ivar str name: the stream name, as defined by the user
    :ivar str clean_name: alphanumeric name derived from name, used for logical IDs
    :ivar dict definition: the merged definition, baseline, defaults and stream
    """

    name_key = "name"
    retention_key = "retention"
    shard_count_key = "shardCount"
    key_id_key = "keyId"
    archive_key = "archive"
    archive_bucket_key = "archiveBucket"
    archive_newlines_key = "archiveTransformNewlines"
    tags_key = "tags"

    def __init__(self, definition: dict):
        if not keyisset(self.name_key, definition) or not isinstance(
            definition[self.name_key], str
        ):
            raise MissingStreamName(
                "Stream definition must have a non-empty name", definition
            )
        self.definition = definition
        self.name = definition[self.name_key]
        self.clean_name = sanitize_name(self.name)
        if not self.clean_name or not self.clean_name[0].isupper():
            raise InvalidStreamName(
                f"Stream {self.name} - {self.clean_name!r} is not a valid logical ID fragment."
                " Once separators are removed, the name must start with an ASCII letter",
                definition,
            )
        self.retention = definition[self.retention_key]
        self.shard_count = definition[self.shard_count_key]
        self.key_id = set_else_none(self.key_id_key, definition)
        self.archive = keyisset(self.archive_key, definition)
        self.archive_bucket = set_else_none(self.archive_bucket_key, definition)
        self.archive_transform_newlines = keyisset(
            self.archive_newlines_key, definition
        )
        self.tags = set_else_none(self.tags_key, definition)
        if self.archive_transform_newlines and not self.archive:
            LOG.warning(
                f"Stream {self.name} - {self.archive_newlines_key} is set but {self.archive_key} is not."
                " Ignoring"
            )

    def __repr__(self):
        return f"{self.name} ({self.clean_name})"


def resolve_stream_settings(stream: dict, defaults: dict = None) -> StreamSettings:
    """
    Merges baseline, defaults and the stream definition, in increasing order of priority.
    Dict values, such as tags, are merged key by key.

    :param dict stream: the stream definition
    :param dict defaults: the defaults for all streams
    :return: the resolved stream settings
    :rtype: StreamSettings
    :raises: MissingStreamName
    """
    if not isinstance(stream, dict):
        raise TypeError("Stream definition must be of type", dict, "got", type(stream))
    if defaults and keyisset(StreamSettings.name_key, defaults):
        LOG.warning("kinesis-streams.defaults - name cannot be set in defaults. Ignoring")
        defaults = {
            key: value
            for key, value in defaults.items()
            if key != StreamSettings.name_key
        }
    definition = merge_definitions(BASELINE, defaults, stream)
    return StreamSettings(definition)
