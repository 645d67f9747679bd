# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
IAM Role used by Kinesis Firehose to read from the streams and write to the archive bucket.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from troposphere.awslambda import Function
    from troposphere.s3 import Bucket

from troposphere import GetAtt, Sub
from troposphere.iam import Policy, Role

from kinesis_composex.iam import (
    external_id_condition,
    policy_document,
    service_role_trust_policy,
)

from .archive_params import DELIVERY_ROLE_T

S3_ACTIONS = [
    "s3:AbortMultipartUpload",
    "s3:GetBucketLocation",
    "s3:GetObject",
    "s3:ListBucket",
    "s3:ListBucketMultipartUploads",
    "s3:PutObject",
]
KINESIS_ACTIONS = [
    "kinesis:DescribeStream",
    "kinesis:GetShardIterator",
    "kinesis:GetRecords",
]
KMS_ACTIONS = ["kms:Decrypt", "kms:GenerateDataKey"]
LAMBDA_ACTIONS = ["lambda:InvokeFunction", "lambda:GetFunctionConfiguration"]


def s3_statement(bucket: Bucket) -> dict:
    return {
        "Sid": "ArchiveBucketAccess",
        "Effect": "Allow",
        "Action": S3_ACTIONS,
        "Resource": [
            GetAtt(bucket, "Arn"),
            Sub(f"${{{bucket.title}.Arn}}/*"),
        ],
    }


def kinesis_statement() -> dict:
    return {
        "Sid": "KinesisStreamsRead",
        "Effect": "Allow",
        "Action": KINESIS_ACTIONS,
        "Resource": Sub(
            "arn:${AWS::Partition}:kinesis:${AWS::Region}:${AWS::AccountId}:stream/*"
        ),
    }


def kms_statement(bucket: Bucket) -> dict:
    """
    KMS access, only when the calls are made by S3 for objects of the archive bucket
    """
    return {
        "Sid": "KmsViaS3ForArchiveBucket",
        "Effect": "Allow",
        "Action": KMS_ACTIONS,
        "Resource": Sub(
            "arn:${AWS::Partition}:kms:${AWS::Region}:${AWS::AccountId}:key/*"
        ),
        "Condition": {
            "StringEquals": {"kms:ViaService": Sub("s3.${AWS::Region}.amazonaws.com")},
            "StringLike": {
                "kms:EncryptionContext:aws:s3:arn": Sub(
                    f"${{{bucket.title}.Arn}}/*"
                )
            },
        },
    }


def lambda_statement(function: Function) -> dict:
    return {
        "Sid": "InvokeRecordsTransform",
        "Effect": "Allow",
        "Action": LAMBDA_ACTIONS,
        "Resource": GetAtt(function, "Arn"),
    }


def define_delivery_role(bucket: Bucket, transform_function: Function = None) -> Role:
    """
    Function to define the IAM role for Firehose delivery streams. Only firehose may assume it, and only on behalf
    of the current account.

    :param troposphere.s3.Bucket bucket: the archive bucket
    :param troposphere.awslambda.Function transform_function: the records transform function, if any
    :rtype: troposphere.iam.Role
    """
    statements = [s3_statement(bucket), kinesis_statement(), kms_statement(bucket)]
    if transform_function:
        statements.append(lambda_statement(transform_function))
    return Role(
        DELIVERY_ROLE_T,
        AssumeRolePolicyDocument=service_role_trust_policy(
            "firehose", external_id_condition()
        ),
        Policies=[
            Policy(
                PolicyName="FirehoseDelivery",
                PolicyDocument=policy_document(statements),
            )
        ],
    )
