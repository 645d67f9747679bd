#  -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille<john@compose-x.io>

import logging
from copy import deepcopy

import jsonschema
import pytest
from pytest import raises

from kinesis_composex.archive.archive_params import (
    ARCHIVE_BUCKET_T,
    DELIVERY_ROLE_T,
    TRANSFORM_FUNCTION_T,
)
from kinesis_composex.common.troposphere_tools import render_resources
from kinesis_composex.exceptions import InvalidStreamName, MissingStreamName
from kinesis_composex.kinesis.kinesis_settings import resolve_stream_settings
from kinesis_composex.kinesis.kinesis_template import build_stream_resources
from kinesis_composex.plugin import HOOK_NAME, KinesisStreamsPlugin, merge_resources


def get_service(streams_config: dict = None, resources: dict = None) -> dict:
    service = {
        "custom": {},
        "provider": {
            "compiledCloudFormationTemplate": {
                "Resources": resources if resources is not None else {}
            }
        },
    }
    if streams_config is not None:
        service["custom"]["kinesis-streams"] = streams_config
    return service


def run_hook(service: dict) -> dict:
    plugin = KinesisStreamsPlugin(service)
    plugin.hooks[HOOK_NAME]()
    return service["provider"]["compiledCloudFormationTemplate"]["Resources"]


@pytest.mark.parametrize(
    "service",
    [
        get_service(),
        get_service(resources={"Existing": {"Type": "AWS::SQS::Queue"}}),
        get_service({"defaults": {"retention": 48}}),
        get_service({"streams": []}),
        {"provider": {"compiledCloudFormationTemplate": {"Resources": {}}}},
        {"custom": None},
    ],
)
def test_no_configuration(service):
    before = deepcopy(service)
    plugin = KinesisStreamsPlugin(service)
    assert plugin.hooks[HOOK_NAME]() is None
    assert service == before


def test_minimal_stream():
    resources = run_hook(get_service({"streams": [{"name": "Test"}]}))
    assert list(resources.keys()) == ["TestKinesisStream"]
    props = resources["TestKinesisStream"]["Properties"]
    assert props["RetentionPeriodHours"] == 24
    assert props["ShardCount"] == 1
    assert props["StreamEncryption"] == {
        "EncryptionType": "KMS",
        "KeyId": "alias/aws/kinesis",
    }


def test_defaults_precedence():
    resources = run_hook(
        get_service(
            {
                "defaults": {"retention": 72, "shardCount": 4},
                "streams": [
                    {"name": "Foo", "retention": 12},
                    {"name": "Bar", "shardCount": 8},
                ],
            }
        )
    )
    foo = resources["FooKinesisStream"]["Properties"]
    bar = resources["BarKinesisStream"]["Properties"]
    assert (foo["RetentionPeriodHours"], foo["ShardCount"]) == (12, 4)
    assert (bar["RetentionPeriodHours"], bar["ShardCount"]) == (72, 8)


def test_existing_resources_kept():
    existing = {"Queue": {"Type": "AWS::SQS::Queue", "Properties": {}}}
    resources = run_hook(
        get_service({"streams": [{"name": "Test"}]}, resources=deepcopy(existing))
    )
    assert list(resources.keys()) == ["Queue", "TestKinesisStream"]
    assert resources["Queue"] == existing["Queue"]


def test_streams_independence():
    stream_a = {"name": "stream-a", "tags": {"app": "a"}}
    stream_b = {"name": "stream-b", "archive": True}
    together = run_hook(get_service({"streams": [stream_a, stream_b]}))
    separately = {}
    for stream in [stream_a, stream_b]:
        separately.update(run_hook(get_service({"streams": [stream]})))
    assert together == separately


def test_idempotent_merge():
    rendered = render_resources(
        build_stream_resources(
            resolve_stream_settings(
                {"name": "Test", "archive": True, "archiveTransformNewlines": True}
            )
        )
    )
    resources = merge_resources({}, rendered)
    snapshot = deepcopy(resources)
    assert merge_resources(resources, rendered) == snapshot


def test_archive_collision_last_wins(caplog):
    config = {
        "streams": [
            {
                "name": "first",
                "archive": True,
                "archiveBucket": "first-bucket",
                "archiveTransformNewlines": True,
            },
            {"name": "second", "archive": True, "archiveBucket": "second-bucket"},
        ]
    }
    with caplog.at_level(logging.WARNING):
        resources = run_hook(get_service(config))
    assert "differ from previous stream" in caplog.text
    assert resources[ARCHIVE_BUCKET_T]["Properties"]["BucketName"] == "second-bucket"
    assert "FirstKinesisFirehose" in resources
    assert "SecondKinesisFirehose" in resources
    assert TRANSFORM_FUNCTION_T in resources
    statements = resources[DELIVERY_ROLE_T]["Properties"]["Policies"][0][
        "PolicyDocument"
    ]["Statement"]
    assert len(statements) == 4


def test_shared_archive_built_once():
    service = get_service(
        {
            "defaults": {"archive": True},
            "streams": [{"name": "first"}, {"name": "second"}],
        }
    )
    plugin = KinesisStreamsPlugin(service)
    plugin.before_compile_functions()
    archive = plugin.archive
    assert archive.signature == (None, False)
    resources = service["provider"]["compiledCloudFormationTemplate"]["Resources"]
    assert "FirstKinesisFirehose" in resources
    assert "SecondKinesisFirehose" in resources


def test_missing_name_fails_without_partial_merge():
    service = get_service({"streams": [{"name": "Test"}, {"retention": 48}]})
    before = deepcopy(service)
    with raises(MissingStreamName):
        run_hook(service)
    assert service == before


def test_invalid_definition():
    service = get_service({"streams": [{"name": "Test", "shardCount": "two"}]})
    with raises(jsonschema.exceptions.ValidationError):
        run_hook(service)


def test_invalid_names_fail_without_partial_merge():
    service = get_service({"streams": [{"name": "---"}, {"name": "..."}]})
    before = deepcopy(service)
    with raises(InvalidStreamName):
        run_hook(service)
    assert service == before


@pytest.mark.parametrize("key_id", [True, ""])
def test_invalid_key_id(key_id):
    service = get_service({"streams": [{"name": "Test", "keyId": key_id}]})
    before = deepcopy(service)
    with raises(jsonschema.exceptions.ValidationError):
        run_hook(service)
    assert service == before


@pytest.mark.parametrize("key_id", [False, None])
def test_key_id_disables_encryption(key_id):
    service = get_service({"streams": [{"name": "Test", "keyId": key_id}]})
    run_hook(service)
    stream = service["provider"]["compiledCloudFormationTemplate"]["Resources"][
        "TestKinesisStream"
    ]
    assert "StreamEncryption" not in stream["Properties"]


def test_missing_template_keys_created():
    service = {"custom": {"kinesis-streams": {"streams": [{"name": "Test"}]}}}
    run_hook(service)
    assert "TestKinesisStream" in (
        service["provider"]["compiledCloudFormationTemplate"]["Resources"]
    )
