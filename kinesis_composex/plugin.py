# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Plugin rendering the streams defined under ``custom.kinesis-streams`` into the service compiled
CloudFormation resources, before the functions get compiled.

Example configuration

.. code-block:: yaml

    custom:
      kinesis-streams:
        defaults:
          archive: false
          keyId: alias/aws/kinesis
          retention: 24
          shardCount: 1
        streams:
          - name: my-stream
            archive: true
            archiveBucket: my-archive-bucket
            archiveTransformNewlines: true
"""

from __future__ import annotations

from compose_x_common.compose_x_common import keyisset, set_else_none

from kinesis_composex.archive.archive_infrastructure import ArchiveInfrastructure
from kinesis_composex.archive.archive_params import SHARED_RESOURCES
from kinesis_composex.common import deep_update
from kinesis_composex.common.logging import LOG
from kinesis_composex.common.troposphere_tools import render_resources
from kinesis_composex.kinesis.kinesis_params import (
    CONFIG_KEY,
    DEFAULTS_KEY,
    STREAMS_KEY,
)
from kinesis_composex.kinesis.kinesis_settings import (
    StreamSettings,
    resolve_stream_settings,
)
from kinesis_composex.kinesis.kinesis_template import build_stream_resources
from kinesis_composex.specs import validate_definition

HOOK_NAME = "before:package:compileFunctions"


def merge_resources(resources: dict, rendered_resources: dict) -> dict:
    """
    Deep merges the rendered resources of a stream into the resources collection.
    Resources already present with the same logical ID get the new properties merged on top, leaf by leaf.
    Existing resources are never removed.

    :param dict resources: the resources collection to update
    :param dict rendered_resources: logical id to CFN definition, see render_resources
    :return: the updated resources collection
    :rtype: dict
    """
    return deep_update(resources, rendered_resources)


def get_streams_config(service: dict) -> dict | None:
    custom = set_else_none("custom", service)
    if not isinstance(custom, dict):
        return None
    return set_else_none(CONFIG_KEY, custom)


def get_template_resources(service: dict) -> dict:
    """Returns the compiled CFN template resources of the service, creating the missing keys"""
    provider = service.setdefault("provider", {})
    template = provider.setdefault("compiledCloudFormationTemplate", {})
    return template.setdefault("Resources", {})


class KinesisStreamsPlugin:
    """
    Class to represent the plugin, registered for the ``before:package:compileFunctions`` hook.

    :ivar dict service: the service definition, which holds the configuration and the compiled template
    :ivar dict hooks: hook name to callable
    :ivar ArchiveInfrastructure archive: the shared archive resources for the current run
    """

    def __init__(self, service: dict, options: dict = None):
        self.service = service
        self.options = options if options else {}
        self.hooks = {HOOK_NAME: self.before_compile_functions}
        self.archive = None

    def get_archive(self, settings: StreamSettings) -> ArchiveInfrastructure:
        """
        Builds the shared archive resources once per run. If a stream needs different ones, these replace the
        previous ones, as the later merge would do anyway.
        """
        if self.archive is not None and not self.archive.matches(settings):
            LOG.warning(
                f"Stream {settings.name} - archive settings (bucket={settings.archive_bucket},"
                f" transform={settings.archive_transform_newlines}) differ from previous stream {self.archive}."
                f" Shared resources {SHARED_RESOURCES} get overridden by this stream definition"
            )
            self.archive = None
        if self.archive is None:
            self.archive = ArchiveInfrastructure.from_settings(settings)
        return self.archive

    def before_compile_functions(self) -> None:
        """
        Resolves every stream settings, builds and renders their resources, then merges them in order
        into the compiled template resources. Nothing is merged if any stream fails.
        """
        config = get_streams_config(self.service)
        if not config or not keyisset(STREAMS_KEY, config):
            LOG.debug(f"No custom.{CONFIG_KEY}.{STREAMS_KEY} defined. Skipping")
            return
        validate_definition(config)
        defaults = set_else_none(DEFAULTS_KEY, config, alt_value={})
        all_settings = [
            resolve_stream_settings(stream, defaults) for stream in config[STREAMS_KEY]
        ]
        self.archive = None
        rendered = []
        for settings in all_settings:
            archive = self.get_archive(settings) if settings.archive else None
            rendered.append(render_resources(build_stream_resources(settings, archive)))
        resources = get_template_resources(self.service)
        for stream_resources in rendered:
            merge_resources(resources, stream_resources)
        LOG.info(
            f"custom.{CONFIG_KEY} - {len(all_settings)} streams rendered: {all_settings}"
        )
