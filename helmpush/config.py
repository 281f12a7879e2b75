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
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from helmpush.constants import (
    ENV_PATH, ENV_USERNAME, ENV_PASSWORD, ENV_ACCESS_TOKEN, ENV_API_KEY,
    ENV_CA_FILE, ENV_CERT_FILE, ENV_KEY_FILE, ENV_INSECURE, ENV_SKIP_REINDEX
)
from helmpush.repo import NamedRepository, RepositoryTarget
from helmpush.utils.strings import parse_bool

logger = logging.getLogger(__name__)

# field -> environment variable consulted when the flag is not given
STRING_ENV_FIELDS = {
    "path": ENV_PATH,
    "username": ENV_USERNAME,
    "password": ENV_PASSWORD,
    "access_token": ENV_ACCESS_TOKEN,
    "api_key": ENV_API_KEY,
    "ca_file": ENV_CA_FILE,
    "cert_file": ENV_CERT_FILE,
    "key_file": ENV_KEY_FILE,
}
BOOL_ENV_FIELDS = {
    "insecure_skip_verify": ENV_INSECURE,
    "skip_reindex": ENV_SKIP_REINDEX,
}


@dataclass(frozen=True)
class PushConfig:
    """Everything one push needs, resolved once from the command line,
    the environment and the stored repository entry.
    """

    chart_name: str
    repository_url: str
    path: str = ""
    username: str = ""
    password: str = ""
    access_token: str = ""
    api_key: str = ""
    ca_file: str = ""
    cert_file: str = ""
    key_file: str = ""
    insecure_skip_verify: bool = False
    skip_reindex: bool = False
    chart_version: str = ""
    app_version: str = ""
    overrides: Tuple[str, ...] = ()


def _entry_defaults(target: RepositoryTarget) -> Dict[str, Any]:
    if not isinstance(target, NamedRepository):
        return {}
    entry = target.entry
    defaults: Dict[str, Any] = {
        "username": entry.username,
        "password": entry.password,
        "ca_file": entry.ca_file,
        "cert_file": entry.cert_file,
        "key_file": entry.key_file,
    }
    if entry.insecure_skip_tls_verify is not None:
        defaults["insecure_skip_verify"] = entry.insecure_skip_tls_verify
    return defaults


def _env_bool(environ: Mapping[str, str], name: str) -> Optional[bool]:
    if name not in environ:
        return None
    value = parse_bool(environ[name])
    if value is None:
        logger.warning(
            "Value \"%s\" of %s is not a valid boolean, will use false.",
            environ[name], name
        )
        return False
    return value


def build_push_config(
    chart_name: str,
    target: RepositoryTarget,
    flags: Mapping[str, Any],
    environ: Mapping[str, str],
) -> PushConfig:
    """Composes the push configuration. For every field a flag given on
    the command line wins over the environment, which wins over the
    stored repository entry, which wins over the default.
    * flags only holds the options explicitly given, empty strings
      count as not given.
    """
    stored = _entry_defaults(target)
    values: Dict[str, Any] = {}

    for field, env_name in STRING_ENV_FIELDS.items():
        flag = flags.get(field)
        if flag:
            values[field] = flag
        elif environ.get(env_name):
            logger.debug("Using %s from environment %s", field, env_name)
            values[field] = environ[env_name]
        elif stored.get(field):
            logger.debug("Using %s from repository %s", field, target.entry.name)
            values[field] = stored[field]

    for field, env_name in BOOL_ENV_FIELDS.items():
        flag = flags.get(field)
        env_value = _env_bool(environ, env_name)
        if flag is not None:
            values[field] = bool(flag)
        elif env_value is not None:
            values[field] = env_value
        elif field in stored:
            values[field] = bool(stored[field])

    return PushConfig(
        chart_name=chart_name,
        repository_url=target.url,
        chart_version=flags.get("chart_version") or "",
        app_version=flags.get("app_version") or "",
        overrides=tuple(flags.get("overrides") or ()),
        **values
    )
