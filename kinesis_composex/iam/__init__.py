# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
IAM helpers to define roles trusted by AWS services, and their policy statements.
"""

from __future__ import annotations

from troposphere import AWS_ACCOUNT_ID, Ref, Sub

POLICY_VERSION = "2012-10-17"


def service_role_trust_policy(service_name: str, conditions: dict = None) -> dict:
    """
    Simple function to format the trust relationship for a Role and an AWS Service

    :param str service_name: name of the AWS service, i.e. firehose
    :param dict conditions: optional Condition block for the statement
    :return: policy document
    :rtype: dict
    """
    statement = {
        "Effect": "Allow",
        "Principal": {"Service": [Sub(f"{service_name}.${{AWS::URLSuffix}}")]},
        "Action": ["sts:AssumeRole"],
    }
    if conditions:
        statement["Condition"] = conditions
    policy_doc = {"Version": POLICY_VERSION, "Statement": [statement]}
    return policy_doc


def external_id_condition() -> dict:
    """Condition so that only calls made on behalf of the current account may assume the role"""
    return {"StringEquals": {"sts:ExternalId": Ref(AWS_ACCOUNT_ID)}}


def policy_document(statements: list) -> dict:
    return {"Version": POLICY_VERSION, "Statement": statements}
