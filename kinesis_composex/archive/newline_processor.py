# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""Firehose records processor. Appends a newline to every record. Deployed inline."""

import base64


def handler(event, context):
    output = []
    for record in event["records"]:
        payload = base64.b64decode(record["data"]) + b"\n"
        output.append(
            {
                "recordId": record["recordId"],
                "result": "Ok",
                "data": base64.b64encode(payload).decode("utf-8"),
            }
        )
    return {"records": output}
