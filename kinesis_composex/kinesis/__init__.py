# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Kinesis Data Streams settings resolution and CFN resources
"""
