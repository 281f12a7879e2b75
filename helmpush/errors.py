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
from typing import Optional


class HelmPushError(Exception):
    """Base error for everything that can stop a chart push. The message
    is what gets printed to the user, the extra fields are kept so the
    callers can branch on them.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class ArgumentError(HelmPushError):
    """Wrong number of arguments or a malformed argument value."""


class UnknownRepository(HelmPushError):
    def __init__(self, name: str, message: Optional[str] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(
            message or "no repo named \"{}\" found".format(name), cause
        )
        self.name = name


class ChartNotFound(HelmPushError):
    def __init__(self, path: str, message: Optional[str] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(
            message or "chart {} not found".format(path), cause
        )
        self.path = path


class InvalidOverride(HelmPushError):
    def __init__(self, override: str, reason: str):
        super().__init__(
            "invalid value override \"{}\": {}".format(override, reason)
        )
        self.override = override
        self.reason = reason


class InvalidTLSConfig(HelmPushError):
    """Client certificate without key (or the reverse), or an unreadable
    CA/cert/key file."""


class NetworkError(HelmPushError):
    """Connection or transport failure talking to the repository."""


class ServerError(HelmPushError):
    def __init__(self, status: int, message: str, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class ResponseParseError(HelmPushError):
    """The response body could not be read or decoded."""
