# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Archival of the Kinesis streams records into S3, via Kinesis Firehose.
"""
