#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Helpers around troposphere templates, to render resources into plain CFN definitions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from troposphere import AWSObject

from troposphere import Template

from kinesis_composex import __version__
from kinesis_composex.common.logging import LOG


def build_template(description: str = None) -> Template:
    """
    Function to build a generic template with the version and metadata set

    :param str description: the template description
    :return: the new template
    :rtype: troposphere.Template
    """
    template = Template(
        description if description else "Template generated by Kinesis ComposeX"
    )
    template.set_version()
    template.set_metadata(
        {"Type": "KinesisComposeX", "Properties": {"Version": __version__}}
    )
    return template


def add_resource(template: Template, resource: AWSObject, replace: bool = False):
    """
    Adds the resource to the template. If a resource with the same title is already in the template,
    it is only replaced if ``replace`` is True.

    :param troposphere.Template template:
    :param resource:
    :param bool replace:
    :return: the resource in the template
    """
    if resource.title not in template.resources:
        return template.add_resource(resource)
    if replace:
        LOG.debug(f"Replacing resource {resource.title} in template")
        template.resources[resource.title] = resource
    else:
        LOG.debug(f"Resource {resource.title} already in template. Skipping")
    return template.resources[resource.title]


def render_resources(resources: dict) -> dict:
    """
    Renders the troposphere resources into plain CFN definitions, references included.
    Properties validation happens at this point.

    :param dict resources: logical id to troposphere resource
    :return: logical id to CFN definition
    :rtype: dict
    """
    template = build_template()
    for resource in resources.values():
        add_resource(template, resource)
    return template.to_dict()["Resources"]
