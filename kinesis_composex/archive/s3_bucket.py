# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

from __future__ import annotations

from troposphere import NoValue
from troposphere.s3 import (
    Bucket,
    BucketEncryption,
    ServerSideEncryptionByDefault,
    ServerSideEncryptionRule,
)

from kinesis_composex.common.logging import LOG

from .archive_params import ARCHIVE_BUCKET_T


def define_archive_bucket(bucket_name: str = None) -> Bucket:
    """
    Function to define the S3 bucket the records get archived into, encrypted with AES256 by default.

    :param str bucket_name: name of the bucket. If not set, CloudFormation generates one.
    :rtype: troposphere.s3.Bucket
    """
    if bucket_name:
        LOG.warning(
            f"{bucket_name} - You defined the bucket name. "
            "Bucket names must be unique. Make sure it is not already in-use"
        )
    return Bucket(
        ARCHIVE_BUCKET_T,
        BucketName=bucket_name if bucket_name else NoValue,
        BucketEncryption=BucketEncryption(
            ServerSideEncryptionConfiguration=[
                ServerSideEncryptionRule(
                    ServerSideEncryptionByDefault=ServerSideEncryptionByDefault(
                        SSEAlgorithm="AES256"
                    )
                )
            ]
        ),
    )
