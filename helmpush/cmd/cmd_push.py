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
from typing import List, Tuple

from helmpush import __version__
from helmpush.client import ArtifactoryClient
from helmpush.config import build_push_config, STRING_ENV_FIELDS, BOOL_ENV_FIELDS
from helmpush.constants import WORK_DIR_PREFIX
from helmpush.errors import ArgumentError, HelmPushError
from helmpush.pkgs.chart import prepare_chart_package
from helmpush.pkgs.response import handle_push_response, handle_reindex_response
from helmpush.repo import resolve_repository
from helmpush.cmd.internal import _decide_mode, _explicit_flags, _safe_delete
from click import command, option, argument, echo, get_current_context

import tempfile
import traceback
import logging
import os
import sys

logger = logging.getLogger(__name__)

GLOBAL_USAGE = """Helm plugin to push chart package to Artifactory

Version: {version}

\b
Examples:

\b
  $ helm push-artifactory mychart-0.1.0.tgz https://artifactory/repo       # push mychart-0.1.0.tgz from "helm package"
  $ helm push-artifactory . https://artifactory/repo                       # package and push chart directory
  $ helm push-artifactory . --version="7c4d121" https://artifactory/repo   # override version in Chart.yaml
  $ helm push-artifactory mychart-0.1.0.tgz my-helm-repo                   # push mychart-0.1.0.tgz to a "my-helm-repo" repository
"""  # noqa: E501

PUSH_FLAGS = (
    list(STRING_ENV_FIELDS) + list(BOOL_ENV_FIELDS)
    + ["chart_version", "app_version", "overrides"]
)


@argument(
    "args",
    type=str,
    nargs=-1,
    metavar="CHART REPOSITORY"
)
@option("--version", "-v", "chart_version", help="Override chart version pre-push")
@option("--app-version", "app_version", help="Override chart app version pre-push")
@option(
    "--set",
    "-s",
    "overrides",
    multiple=True,
    help="""
    <key>=<value> pairs, overrides values in chart values.yaml
    (example: -s image.tag="0.5.2"). Can be given more than once.
    """,
)
@option(
    "--path",
    help="""
    Path to save the chart in the local repository
    (https://artifactory/repo/path/chart.version.tgz) [$HELM_REPO_PATH]
    """,
)
@option("--username", "-u", help="Override HTTP basic auth username [$HELM_REPO_USERNAME]")
@option("--password", "-p", help="Override HTTP basic auth password [$HELM_REPO_PASSWORD]")
@option(
    "--access-token",
    "access_token",
    help="Send token in Authorization header [$HELM_REPO_ACCESS_TOKEN]"
)
@option("--api-key", "api_key", help="Send api key in artifactory header [$HELM_REPO_API_KEY]")
@option(
    "--ca-file",
    "ca_file",
    help="""
    Verify certificates of HTTPS-enabled servers using this CA bundle [$HELM_REPO_CA_FILE]
    """,
)
@option(
    "--cert-file",
    "cert_file",
    help="Identify HTTPS client using this SSL certificate file [$HELM_REPO_CERT_FILE]",
)
@option(
    "--key-file",
    "key_file",
    help="Identify HTTPS client using this SSL key file [$HELM_REPO_KEY_FILE]",
)
@option(
    "--insecure",
    "insecure_skip_verify",
    is_flag=True,
    default=False,
    help="""
    Connect to server with an insecure way by skipping certificate
    verification [$HELM_REPO_INSECURE]
    """,
)
@option(
    "--skip-reindex",
    "skip_reindex",
    is_flag=True,
    default=False,
    help="""
    Avoid trigger reindex in the repository after pushing the chart
    [$HELM_REPO_SKIP_REINDEX]
    """,
)
@option(
    "--debug",
    "-D",
    help="Debug mode, will print all debug logs for problem tracking. [$HELM_DEBUG]",
    is_flag=True,
    default=False
)
@option(
    "--quiet",
    "-q",
    help="Quiet mode, will shrink most of the logs except warning and errors.",
    is_flag=True,
    default=False
)
@command(
    name="push-artifactory",
    help=GLOBAL_USAGE.format(version=__version__),
    short_help="Helm plugin to push chart package to Artifactory",
)
def push(
    args: Tuple[str, ...],
    chart_version: str = None,
    app_version: str = None,
    overrides: List[str] = None,
    path: str = None,
    username: str = None,
    password: str = None,
    access_token: str = None,
    api_key: str = None,
    ca_file: str = None,
    cert_file: str = None,
    key_file: str = None,
    insecure_skip_verify: bool = False,
    skip_reindex: bool = False,
    debug: bool = False,
    quiet: bool = False
):
    _decide_mode(is_quiet=quiet, is_debug=debug)
    tmp_dir = None
    try:
        if len(args) != 2:
            raise ArgumentError(
                "This command needs 2 arguments: name of chart, repository URL"
            )
        chart_name, repository = args
        flags = _explicit_flags(get_current_context(), PUSH_FLAGS)

        target = resolve_repository(repository)
        conf = build_push_config(chart_name, target, flags, os.environ)

        tmp_dir = tempfile.mkdtemp(prefix=WORK_DIR_PREFIX)
        package = prepare_chart_package(
            conf.chart_name, tmp_dir,
            version=conf.chart_version,
            app_version=conf.app_version,
            overrides=conf.overrides
        )

        client = ArtifactoryClient(
            conf.repository_url,
            path=conf.path,
            username=conf.username,
            password=conf.password,
            access_token=conf.access_token,
            api_key=conf.api_key,
            ca_file=conf.ca_file,
            cert_file=conf.cert_file,
            key_file=conf.key_file,
            insecure_skip_verify=conf.insecure_skip_verify,
        )

        resp = client.upload_chart_package(package.name, package.path)
        handle_push_response(resp)
        echo("Done.")

        if conf.skip_reindex:
            logger.debug("Reindex of %s is skipped", conf.repository_url)
            return

        resp = client.reindex_artifactory_repo()
        echo(handle_reindex_response(resp))
    except HelmPushError as e:
        echo("Error: {}".format(e), err=True)
        sys.exit(1)
    except Exception:
        echo(traceback.format_exc(), err=True)
        sys.exit(1)
    finally:
        _safe_delete(tmp_dir)
