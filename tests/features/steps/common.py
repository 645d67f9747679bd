#  -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille<john@compose-x.io>

from copy import deepcopy
from os import path

from behave import given, then, when

from kinesis_composex.cli import load_service_file
from kinesis_composex.plugin import HOOK_NAME, KinesisStreamsPlugin


def here():
    return path.abspath(path.dirname(__file__))


@given("I use {file_path} as my service file")
def step_impl(context, file_path):
    """
    Function to import the service definition from use-cases.

    :param context:
    :param str file_path:
    """
    cases_path = path.abspath(f"{here()}/../../../{file_path}")
    context.service = load_service_file(cases_path)
    context.original = deepcopy(context.service)


@when("I run the plugin hook")
def step_impl(context):
    plugin = KinesisStreamsPlugin(context.service)
    plugin.hooks[HOOK_NAME]()
    context.resources = context.service["provider"]["compiledCloudFormationTemplate"][
        "Resources"
    ]


@then("the service definition is unchanged")
def step_impl(context):
    assert context.service == context.original


@then("I should have {resource_id} of type {resource_type}")
def step_impl(context, resource_id, resource_type):
    assert resource_id in context.resources, list(context.resources.keys())
    assert context.resources[resource_id]["Type"] == resource_type


@then("I should not have {resource_id}")
def step_impl(context, resource_id):
    assert resource_id not in context.resources
