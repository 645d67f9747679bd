# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Lambda function, and its IAM role and permission, that Firehose invokes to append a newline to each record
before delivering them to S3.
"""

from __future__ import annotations

from importlib.resources import files

from troposphere import AWS_ACCOUNT_ID, GetAtt, Ref, Sub
from troposphere.awslambda import Code, Function, Permission
from troposphere.iam import Policy, Role

from kinesis_composex.iam import policy_document, service_role_trust_policy

from .archive_params import (
    TRANSFORM_FUNCTION_T,
    TRANSFORM_HANDLER,
    TRANSFORM_PERMISSION_T,
    TRANSFORM_ROLE_T,
    TRANSFORM_RUNTIME,
    TRANSFORM_TIMEOUT,
)

PROCESSOR_SOURCE = "archive/newline_processor.py"


def get_processor_code() -> str:
    """Returns the source code of the records processor, to deploy as the function inline code"""
    return files("kinesis_composex").joinpath(PROCESSOR_SOURCE).read_text()


def define_transform_role() -> Role:
    return Role(
        TRANSFORM_ROLE_T,
        AssumeRolePolicyDocument=service_role_trust_policy("lambda"),
        Policies=[
            Policy(
                PolicyName="CloudWatchLogsAccess",
                PolicyDocument=policy_document(
                    [
                        {
                            "Effect": "Allow",
                            "Action": [
                                "logs:CreateLogGroup",
                                "logs:CreateLogStream",
                                "logs:PutLogEvents",
                            ],
                            "Resource": Sub("arn:${AWS::Partition}:logs:*:*:*"),
                        }
                    ]
                ),
            )
        ],
    )


def define_transform_function(role: Role) -> Function:
    """
    :param troposphere.iam.Role role: the function execution role
    :rtype: troposphere.awslambda.Function
    """
    return Function(
        TRANSFORM_FUNCTION_T,
        Code=Code(ZipFile=get_processor_code()),
        Handler=TRANSFORM_HANDLER,
        Role=GetAtt(role, "Arn"),
        Runtime=TRANSFORM_RUNTIME,
        Timeout=TRANSFORM_TIMEOUT,
    )


def define_transform_permission(function: Function) -> Permission:
    return Permission(
        TRANSFORM_PERMISSION_T,
        Action="lambda:InvokeFunction",
        FunctionName=GetAtt(function, "Arn"),
        Principal="firehose.amazonaws.com",
        SourceAccount=Ref(AWS_ACCOUNT_ID),
    )
