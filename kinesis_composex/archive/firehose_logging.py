# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kinesis_composex.kinesis.kinesis_settings import StreamSettings

from troposphere import Ref
from troposphere.firehose import CloudWatchLoggingOptions
from troposphere.logs import LogGroup, LogStream

from .archive_params import (
    DELIVERY_LOG_GROUP_T,
    FIREHOSE_LOG_STREAM_SUFFIX,
    LOG_RETENTION_DAYS,
)


def define_log_group() -> LogGroup:
    return LogGroup(DELIVERY_LOG_GROUP_T, RetentionInDays=LOG_RETENTION_DAYS)


def define_log_stream(settings: StreamSettings, log_group: LogGroup) -> LogStream:
    """
    Log stream of the stream delivery errors, named after the stream clean name

    :param StreamSettings settings:
    :param troposphere.logs.LogGroup log_group:
    :rtype: troposphere.logs.LogStream
    """
    return LogStream(
        f"{settings.clean_name}{FIREHOSE_LOG_STREAM_SUFFIX}",
        LogGroupName=Ref(log_group),
        LogStreamName=settings.clean_name,
    )


def define_logging_options(
    settings: StreamSettings, log_group: LogGroup
) -> CloudWatchLoggingOptions:
    return CloudWatchLoggingOptions(
        Enabled=True,
        LogGroupName=Ref(log_group),
        LogStreamName=settings.clean_name,
    )
