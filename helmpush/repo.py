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
import logging
import os
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Union
from urllib.parse import urlparse

import jsonschema
import yaml

from helmpush.constants import REPOSITORY_CONFIG_ENV, REPOSITORY_CONFIG_FILE
from helmpush.errors import ArgumentError, UnknownRepository
from helmpush.utils.yaml import read_yaml_from_file_path

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"^https?://")


@dataclass(frozen=True)
class RepositoryEntry:
    """A named repository as stored by helm in repositories.yaml."""

    name: str
    url: str
    username: str = ""
    password: str = ""
    ca_file: str = ""
    cert_file: str = ""
    key_file: str = ""
    insecure_skip_tls_verify: Optional[bool] = None

    @staticmethod
    def from_dict(data: Dict) -> 'RepositoryEntry':
        return RepositoryEntry(
            name=data["name"],
            url=data["url"],
            username=data.get("username") or "",
            password=data.get("password") or "",
            ca_file=data.get("caFile") or "",
            cert_file=data.get("certFile") or "",
            key_file=data.get("keyFile") or "",
            insecure_skip_tls_verify=data.get("insecure_skip_tls_verify"),
        )


@dataclass(frozen=True)
class DirectURL:
    url: str


@dataclass(frozen=True)
class NamedRepository:
    entry: RepositoryEntry

    @property
    def url(self) -> str:
        return self.entry.url


RepositoryTarget = Union[DirectURL, NamedRepository]


def get_repository_config_path() -> str:
    """Location of helm's repositories.yaml, following helm's own
    lookup: $HELM_REPOSITORY_CONFIG, then the XDG config home.
    """
    config_path = os.getenv(REPOSITORY_CONFIG_ENV)
    if config_path:
        return config_path
    config_home = os.getenv("XDG_CONFIG_HOME")
    if not config_home:
        config_home = os.path.join(os.getenv("HOME", ""), ".config")
    return os.path.join(config_home, "helm", REPOSITORY_CONFIG_FILE)


def load_repositories(config_path: Optional[str] = None) -> List[RepositoryEntry]:
    """Loads all repository entries from the repositories.yaml. A missing
    file means there is no named repository at all.
    """
    config_path = config_path or get_repository_config_path()
    if not os.path.isfile(config_path):
        logger.debug("Repository configuration %s does not exist", config_path)
        return []
    data = read_yaml_from_file_path(config_path, "schemas/repositories.json")
    if not data:
        return []
    return [RepositoryEntry.from_dict(r) for r in data.get("repositories") or []]


def get_repo_by_name(name: str, config_path: Optional[str] = None) -> RepositoryEntry:
    config_path = config_path or get_repository_config_path()
    try:
        entries = load_repositories(config_path)
    except (OSError, yaml.YAMLError, jsonschema.ValidationError) as e:
        raise UnknownRepository(
            name,
            "could not load repository configuration {}: {}".format(config_path, e),
            cause=e
        ) from e
    for entry in entries:
        if entry.name == name:
            logger.debug("Found repository %s in %s: %s", name, config_path, entry.url)
            return entry
    raise UnknownRepository(name)


def resolve_repository(repository: str, config_path: Optional[str] = None) -> RepositoryTarget:
    """Decides whether the repository argument is a plain URL or the
    name of a repository known to helm. URLs are taken as they are,
    without any lookup in the repository configuration.
    """
    if URL_PATTERN.match(repository):
        try:
            parsed = urlparse(repository)
            # port is parsed lazily
            parsed.port
        except ValueError as e:
            raise ArgumentError(
                "invalid repository URL {}: {}".format(repository, e), cause=e
            ) from e
        if not parsed.netloc:
            raise ArgumentError("invalid repository URL: {}".format(repository))
        return DirectURL(repository)
    return NamedRepository(get_repo_by_name(repository, config_path))
