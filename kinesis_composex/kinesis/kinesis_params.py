# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

CONFIG_KEY = "kinesis-streams"
DEFAULTS_KEY = "defaults"
STREAMS_KEY = "streams"

STREAM_SUFFIX = "KinesisStream"
STREAM_ARN_ATTR = "Arn"

DEFAULT_RETENTION = 24
DEFAULT_SHARD_COUNT = 1
DEFAULT_KEY_ID = "alias/aws/kinesis"

BASELINE = {
    "retention": DEFAULT_RETENTION,
    "shardCount": DEFAULT_SHARD_COUNT,
    "keyId": DEFAULT_KEY_ID,
    "archive": False,
    "archiveTransformNewlines": False,
}
