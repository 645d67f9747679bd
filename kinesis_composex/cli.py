# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Console script for kinesis_composex.
"""

import argparse
import json
import logging
import sys
from os import makedirs, path

import yaml
from cfn_flip.yaml_dumper import LongCleanDumper

try:
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeLoader as Loader

from kinesis_composex.common.logging import LOG
from kinesis_composex.plugin import HOOK_NAME, KinesisStreamsPlugin

RENDER_CMD = "render"
INPUT_FILE_ARG = "ServiceFile"
OUTPUT_DIR_ARG = "OutputDirectory"
FORMAT_ARG = "TemplateFormat"
NAME_ARG = "Name"
DEFAULT_FORMAT = "json"
ALLOWED_FORMATS = ["json", "yaml"]
VALID_LEVELS = ["FATAL", "CRITICAL", "ERROR", "WARNING", "WARN", "INFO", "DEBUG"]


def main_parser():
    """
    Console script for kinesis_composex.
    """
    parser = argparse.ArgumentParser()
    cmd_parsers = parser.add_subparsers(dest="command", help="Command to execute.")
    render_parser = cmd_parsers.add_parser(
        name=RENDER_CMD,
        help="Renders the Kinesis streams resources into a CloudFormation template",
    )
    render_parser.add_argument(
        "-f",
        "--service-file",
        dest=INPUT_FILE_ARG,
        required=True,
        help="Path to the service definition file, with custom.kinesis-streams",
    )
    render_parser.add_argument(
        "-d",
        "--output-dir",
        required=False,
        help="Output directory to write the template to. Prints to stdout if not set",
        type=str,
        dest=OUTPUT_DIR_ARG,
    )
    render_parser.add_argument(
        "-n",
        "--name",
        help="Name of the template file. Defaults to the service name, or the service file name",
        required=False,
        type=str,
        dest=NAME_ARG,
    )
    render_parser.add_argument(
        "--format",
        help="Defines the format you want to use.",
        type=str,
        dest=FORMAT_ARG,
        choices=ALLOWED_FORMATS,
        default=DEFAULT_FORMAT,
    )
    render_parser.add_argument(
        "--loglevel", type=str, help="Log level. Defaults to INFO", required=False
    )
    return parser


def load_service_file(file_path: str) -> dict:
    with open(file_path) as service_fd:
        content = yaml.load(service_fd.read(), Loader=Loader)
    if not isinstance(content, dict):
        raise TypeError(f"{file_path} content must be a mapping, got", type(content))
    return content


def render_template(service: dict) -> dict:
    """
    Runs the plugin hook on the service definition and returns the CloudFormation template with the resources.

    :param dict service: the service definition
    :return: the CFN template
    :rtype: dict
    """
    plugin = KinesisStreamsPlugin(service)
    plugin.hooks[HOOK_NAME]()
    template = service.get("provider", {}).get("compiledCloudFormationTemplate", {})
    return {
        "AWSTemplateFormatVersion": template.get(
            "AWSTemplateFormatVersion", "2010-09-09"
        ),
        "Description": template.get(
            "Description", "Template generated by Kinesis ComposeX"
        ),
        "Resources": template.get("Resources", {}),
    }


def format_template(template: dict, template_format: str) -> str:
    if template_format == "yaml":
        return yaml.dump(template, Dumper=LongCleanDumper)
    return json.dumps(template, indent=4)


def set_log_level(log_level: str) -> None:
    if log_level.upper() in VALID_LEVELS:
        LOG.setLevel(logging.getLevelName(log_level.upper()))
    else:
        print(f"Log level value {log_level} is invalid. Must me one of {VALID_LEVELS}")


def main(args=None):
    """
    Main entry point for CLI
    :return: status code
    """
    parser = main_parser()
    args = parser.parse_args(args)
    if not args.command:
        parser.print_help()
        return 1
    if args.loglevel:
        set_log_level(args.loglevel)
    LOG.debug(args)
    service_file = getattr(args, INPUT_FILE_ARG)
    service = load_service_file(service_file)
    body = format_template(render_template(service), getattr(args, FORMAT_ARG))
    output_dir = getattr(args, OUTPUT_DIR_ARG)
    if not output_dir:
        print(body)
        return 0
    name = getattr(args, NAME_ARG)
    if not name:
        name = (
            service["service"]
            if isinstance(service.get("service"), str)
            else path.splitext(path.basename(service_file))[0]
        )
    makedirs(output_dir, exist_ok=True)
    file_path = path.join(output_dir, f"{name}.{getattr(args, FORMAT_ARG)}")
    with open(file_path, "w") as template_fd:
        template_fd.write(body)
    LOG.info(f"Template written successfully at {path.abspath(file_path)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())  # pragma: no cover
