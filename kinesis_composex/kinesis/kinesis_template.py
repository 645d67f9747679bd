# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Module to define the Kinesis stream, and the resources graph of a stream.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kinesis_composex.archive.archive_infrastructure import ArchiveInfrastructure
    from .kinesis_settings import StreamSettings

from troposphere import Tags
from troposphere.kinesis import Stream, StreamEncryption

from kinesis_composex.archive.firehose_template import define_archive_resources
from kinesis_composex.common.logging import LOG

from .kinesis_params import STREAM_SUFFIX


def define_tags(tags) -> Tags:
    """
    Function to render the tags, defined either as a mapping or as a list of Key/Value

    :param dict|list tags:
    :rtype: troposphere.Tags
    """
    if isinstance(tags, dict):
        return Tags({key: str(value) for key, value in tags.items()})
    elif isinstance(tags, list):
        return Tags({tag["Key"]: tag["Value"] for tag in tags})
    raise TypeError("tags must be one of", [dict, list], "got", type(tags))


def handle_encryption(settings: StreamSettings) -> StreamEncryption:
    return StreamEncryption(EncryptionType="KMS", KeyId=settings.key_id)


def define_stream(settings: StreamSettings) -> Stream:
    """
    Function to define the Kinesis stream

    :param StreamSettings settings:
    :rtype: troposphere.kinesis.Stream
    """
    props = {
        "Name": settings.name,
        "RetentionPeriodHours": settings.retention,
        "ShardCount": settings.shard_count,
    }
    if settings.key_id:
        props["StreamEncryption"] = handle_encryption(settings)
    else:
        LOG.warning(f"Stream {settings.name} - Server side encryption is disabled")
    if settings.tags:
        props["Tags"] = define_tags(settings.tags)
    return Stream(f"{settings.clean_name}{STREAM_SUFFIX}", **props)


def build_stream_resources(
    settings: StreamSettings, archive: ArchiveInfrastructure = None
) -> OrderedDict:
    """
    Builds all the resources of one stream: the Kinesis stream and, if archive is enabled, the
    archival resources. Nothing is merged anywhere: the returned mapping is for the caller to merge.

    :param StreamSettings settings: the resolved stream settings
    :param ArchiveInfrastructure archive: the shared archive resources to use, if already built
    :return: logical id to troposphere resource
    :rtype: OrderedDict
    """
    resources = OrderedDict()
    stream = define_stream(settings)
    resources[stream.title] = stream
    if settings.archive:
        resources.update(define_archive_resources(settings, stream, archive))
    LOG.info(f"Stream {settings.name} - {len(resources)} resources defined")
    return resources
