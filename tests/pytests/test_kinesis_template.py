#  -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille<john@compose-x.io>

from pytest import raises

from kinesis_composex.common.troposphere_tools import render_resources
from kinesis_composex.kinesis.kinesis_settings import resolve_stream_settings
from kinesis_composex.kinesis.kinesis_template import (
    build_stream_resources,
    define_tags,
)


def render_stream(stream: dict, defaults: dict = None) -> dict:
    return render_resources(
        build_stream_resources(resolve_stream_settings(stream, defaults))
    )


def test_minimal_stream():
    resources = render_stream({"name": "Test"})
    assert list(resources.keys()) == ["TestKinesisStream"]
    assert resources["TestKinesisStream"] == {
        "Type": "AWS::Kinesis::Stream",
        "Properties": {
            "Name": "Test",
            "RetentionPeriodHours": 24,
            "ShardCount": 1,
            "StreamEncryption": {
                "EncryptionType": "KMS",
                "KeyId": "alias/aws/kinesis",
            },
        },
    }


def test_logical_id_uses_clean_name():
    resources = render_stream({"name": "my-cool.stream", "keyId": "alias/custom"})
    stream = resources["MyCoolStreamKinesisStream"]
    assert stream["Properties"]["Name"] == "my-cool.stream"
    assert stream["Properties"]["StreamEncryption"]["KeyId"] == "alias/custom"


def test_no_encryption():
    resources = render_stream({"name": "Test", "keyId": False})
    assert "StreamEncryption" not in resources["TestKinesisStream"]["Properties"]


def test_tags():
    resources = render_stream(
        {"name": "Test", "tags": {"team": "data"}}, {"tags": {"env": "prod"}}
    )
    assert resources["TestKinesisStream"]["Properties"]["Tags"] == [
        {"Key": "env", "Value": "prod"},
        {"Key": "team", "Value": "data"},
    ]
    resources = render_stream({"name": "Test", "tags": {}})
    assert "Tags" not in resources["TestKinesisStream"]["Properties"]


def test_tags_list():
    tags = [{"Key": "b", "Value": "2"}, {"Key": "a", "Value": "1"}]
    resources = render_stream({"name": "Test", "tags": tags})
    assert resources["TestKinesisStream"]["Properties"]["Tags"] == [
        {"Key": "a", "Value": "1"},
        {"Key": "b", "Value": "2"},
    ]
    with raises(TypeError):
        define_tags("team=data")


def test_no_archive_resources():
    resources = build_stream_resources(resolve_stream_settings({"name": "Test"}))
    assert list(resources.keys()) == ["TestKinesisStream"]
