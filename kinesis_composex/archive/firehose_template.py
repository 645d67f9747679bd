# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

from __future__ import annotations

from collections import OrderedDict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from troposphere.kinesis import Stream
    from kinesis_composex.kinesis.kinesis_settings import StreamSettings

from troposphere import GetAtt
from troposphere.firehose import (
    BufferingHints,
    DeliveryStream,
    ExtendedS3DestinationConfiguration,
    KinesisStreamSourceConfiguration,
    ProcessingConfiguration,
    Processor,
    ProcessorParameter,
)

from kinesis_composex.common.logging import LOG
from kinesis_composex.exceptions import IncompatibleOptions

from .archive_infrastructure import ArchiveInfrastructure
from .archive_params import (
    BUFFER_INTERVAL_SECONDS,
    BUFFER_SIZE_MB,
    COMPRESSION_FORMAT,
    DELIVERY_STREAM_TYPE,
    FIREHOSE_SUFFIX,
    TRANSFORM_RETRIES,
)
from .firehose_logging import define_log_stream, define_logging_options


def define_processing_configuration(
    archive: ArchiveInfrastructure,
) -> ProcessingConfiguration:
    """
    Invokes the newline transform function on the records, using the delivery role.
    """
    return ProcessingConfiguration(
        Enabled=True,
        Processors=[
            Processor(
                Type="Lambda",
                Parameters=[
                    ProcessorParameter(
                        ParameterName="LambdaArn",
                        ParameterValue=GetAtt(archive.transform_function, "Arn"),
                    ),
                    ProcessorParameter(
                        ParameterName="NumberOfRetries",
                        ParameterValue=str(TRANSFORM_RETRIES),
                    ),
                    ProcessorParameter(
                        ParameterName="RoleArn",
                        ParameterValue=GetAtt(archive.delivery_role, "Arn"),
                    ),
                ],
            )
        ],
    )


def define_delivery_stream(
    settings: StreamSettings, stream: Stream, archive: ArchiveInfrastructure
) -> DeliveryStream:
    """
    Function to define the Firehose delivery stream reading from the Kinesis stream and writing GZIP-ed batches
    of records to the archive bucket, under the stream name prefix.

    :param StreamSettings settings:
    :param troposphere.kinesis.Stream stream:
    :param ArchiveInfrastructure archive:
    :rtype: troposphere.firehose.DeliveryStream
    """
    destination = ExtendedS3DestinationConfiguration(
        BucketARN=GetAtt(archive.bucket, "Arn"),
        BufferingHints=BufferingHints(
            IntervalInSeconds=BUFFER_INTERVAL_SECONDS, SizeInMBs=BUFFER_SIZE_MB
        ),
        CloudWatchLoggingOptions=define_logging_options(settings, archive.log_group),
        CompressionFormat=COMPRESSION_FORMAT,
        Prefix=f"{settings.name}/",
        RoleARN=GetAtt(archive.delivery_role, "Arn"),
    )
    if archive.transform_newlines:
        destination.ProcessingConfiguration = define_processing_configuration(archive)
    return DeliveryStream(
        f"{settings.clean_name}{FIREHOSE_SUFFIX}",
        DeliveryStreamType=DELIVERY_STREAM_TYPE,
        KinesisStreamSourceConfiguration=KinesisStreamSourceConfiguration(
            KinesisStreamARN=GetAtt(stream, "Arn"),
            RoleARN=GetAtt(archive.delivery_role, "Arn"),
        ),
        ExtendedS3DestinationConfiguration=destination,
    )


def define_archive_resources(
    settings: StreamSettings, stream: Stream, archive: ArchiveInfrastructure = None
) -> OrderedDict:
    """
    Function to define the archival resources of a stream. Resources are in dependency order.

    :param StreamSettings settings:
    :param troposphere.kinesis.Stream stream:
    :param ArchiveInfrastructure archive: shared resources to use. Built from the settings if not set.
    :return: logical id to resource
    :rtype: OrderedDict
    :raises: IncompatibleOptions if archive was not built for these settings
    """
    if archive is None:
        archive = ArchiveInfrastructure.from_settings(settings)
    elif not archive.matches(settings):
        raise IncompatibleOptions(
            f"Stream {settings.name} - archive settings do not match shared archive infrastructure",
            archive,
        )
    resources = archive.storage_resources
    log_stream = define_log_stream(settings, archive.log_group)
    delivery_stream = define_delivery_stream(settings, stream, archive)
    resources[log_stream.title] = log_stream
    resources[delivery_stream.title] = delivery_stream
    resources.update(archive.transform_resources)
    LOG.debug(f"Stream {settings.name} - archive resources {list(resources.keys())}")
    return resources
