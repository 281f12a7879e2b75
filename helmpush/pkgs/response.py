"""
Copyright (C) 2022 Red Hat, Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

         http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""
import json
import logging

import requests

from helmpush.constants import PUSH_SUCCESS_STATUS, REINDEX_SUCCESS_STATUS
from helmpush.errors import ServerError

logger = logging.getLogger(__name__)


def _body_text(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


def get_artifactory_error(body: bytes, status: int) -> ServerError:
    """Decodes the Artifactory error envelope
    {"errors": [{"status": 409, "message": "..."}]}
    into a ServerError carrying the first message.
    """
    text = _body_text(body)
    try:
        response = json.loads(text)
        errors = response["errors"]
        first = errors[0]
        message = first.get("message", "")
    except (ValueError, TypeError, KeyError, IndexError, AttributeError):
        return ServerError(
            status,
            "{}: could not properly parse response JSON: {}".format(status, text),
            text
        )
    return ServerError(status, "{}: {}".format(status, message), text)


def handle_push_response(resp: requests.Response):
    body = resp.content
    if resp.status_code != PUSH_SUCCESS_STATUS:
        raise get_artifactory_error(body, resp.status_code)
    try:
        download_uri = json.loads(_body_text(body)).get("downloadUri")
    except (ValueError, AttributeError):
        download_uri = None
    if download_uri:
        logger.info("Chart pushed to %s", download_uri)


def handle_reindex_response(resp: requests.Response) -> str:
    body = resp.content
    if resp.status_code != REINDEX_SUCCESS_STATUS:
        raise get_artifactory_error(body, resp.status_code)
    return _body_text(body)
