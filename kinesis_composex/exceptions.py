#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Custom exceptions for kinesis-compose-x
"""


class KinesisComposeXException(Exception):
    """
    Top class for Kinesis Compose-X Exceptions
    """

    def __init__(self, msg, *args):
        super().__init__(msg, *args)


class MissingStreamName(KinesisComposeXException, KeyError):
    """
    Exception when a stream definition has no name, or an empty one, which would make the logical ID invalid
    """


class IncompatibleOptions(KinesisComposeXException):
    """
    Exception when two stream options conflict with each other
    """


class InvalidStreamName(KinesisComposeXException, ValueError):
    """
    Exception when a stream name cannot be turned into a logical ID fragment starting with an uppercase letter
    """
