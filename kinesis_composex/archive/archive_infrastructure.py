# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Module for the ArchiveInfrastructure class, the archival resources shared by all the streams.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kinesis_composex.kinesis.kinesis_settings import StreamSettings

from .firehose_iam import define_delivery_role
from .firehose_logging import define_log_group
from .newline_transform import (
    define_transform_function,
    define_transform_permission,
    define_transform_role,
)
from .s3_bucket import define_archive_bucket


class ArchiveInfrastructure:
    """
    Class to represent the archive bucket, the delivery role and log group, and the optional newline transform.
    These resources have fixed logical IDs: when merged into the same template, the last ones merged win.

    :ivar troposphere.s3.Bucket bucket:
    :ivar troposphere.iam.Role delivery_role:
    :ivar troposphere.logs.LogGroup log_group:
    :ivar troposphere.iam.Role transform_role:
    :ivar troposphere.awslambda.Function transform_function:
    :ivar troposphere.awslambda.Permission transform_permission:
    """

    def __init__(self, bucket_name: str = None, transform_newlines: bool = False):
        self.bucket_name = bucket_name
        self.transform_newlines = transform_newlines
        self.bucket = define_archive_bucket(bucket_name)
        self.transform_role = None
        self.transform_function = None
        self.transform_permission = None
        if transform_newlines:
            self.transform_role = define_transform_role()
            self.transform_function = define_transform_function(self.transform_role)
            self.transform_permission = define_transform_permission(
                self.transform_function
            )
        self.delivery_role = define_delivery_role(
            self.bucket, self.transform_function
        )
        self.log_group = define_log_group()

    @classmethod
    def from_settings(cls, settings: StreamSettings) -> ArchiveInfrastructure:
        return cls(settings.archive_bucket, settings.archive_transform_newlines)

    def __repr__(self):
        return f"ArchiveInfrastructure(bucket_name={self.bucket_name}, transform_newlines={self.transform_newlines})"

    @property
    def signature(self) -> tuple:
        return self.bucket_name, self.transform_newlines

    def matches(self, settings: StreamSettings) -> bool:
        """Whether the stream settings would produce the same shared resources"""
        return self.signature == (
            settings.archive_bucket,
            settings.archive_transform_newlines,
        )

    @property
    def storage_resources(self) -> OrderedDict:
        """Bucket, delivery role and log group, which the delivery stream depends on"""
        return OrderedDict(
            (resource.title, resource)
            for resource in [self.bucket, self.delivery_role, self.log_group]
        )

    @property
    def transform_resources(self) -> OrderedDict:
        if not self.transform_newlines:
            return OrderedDict()
        return OrderedDict(
            (resource.title, resource)
            for resource in [
                self.transform_role,
                self.transform_function,
                self.transform_permission,
            ]
        )
