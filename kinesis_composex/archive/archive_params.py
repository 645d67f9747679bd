# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

# Shared by all the streams with archive enabled
ARCHIVE_BUCKET_T = "KinesisArchiveBucket"
DELIVERY_ROLE_T = "KinesisFirehoseDeliveryRole"
DELIVERY_LOG_GROUP_T = "KinesisFirehoseLogGroup"
TRANSFORM_FUNCTION_T = "KinesisNewlineTransformFunction"
TRANSFORM_ROLE_T = "KinesisNewlineTransformRole"
TRANSFORM_PERMISSION_T = "KinesisNewlineTransformPermission"

SHARED_RESOURCES = [
    ARCHIVE_BUCKET_T,
    DELIVERY_ROLE_T,
    DELIVERY_LOG_GROUP_T,
    TRANSFORM_FUNCTION_T,
    TRANSFORM_ROLE_T,
    TRANSFORM_PERMISSION_T,
]

FIREHOSE_SUFFIX = "KinesisFirehose"
FIREHOSE_LOG_STREAM_SUFFIX = "KinesisFirehoseLogStream"

DELIVERY_STREAM_TYPE = "KinesisStreamAsSource"
BUFFER_INTERVAL_SECONDS = 60
BUFFER_SIZE_MB = 1
COMPRESSION_FORMAT = "GZIP"
LOG_RETENTION_DAYS = 30

TRANSFORM_RETRIES = 3
TRANSFORM_TIMEOUT = 60
TRANSFORM_RUNTIME = "python3.12"
TRANSFORM_HANDLER = "index.handler"
