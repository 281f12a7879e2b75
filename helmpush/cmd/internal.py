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
from typing import Any, Dict, Iterable
from shutil import rmtree

from click import Context
from click.core import ParameterSource

from helmpush.constants import HELM_DEBUG_ENV
from helmpush.utils.logs import set_logging
from helmpush.utils.strings import parse_bool

import logging
import os

logger = logging.getLogger(__name__)


def _safe_delete(tmp_dir: str):
    if tmp_dir and os.path.exists(tmp_dir):
        logger.debug("Cleaning up work directory: %s", tmp_dir)
        try:
            rmtree(tmp_dir)
        except OSError as e:
            logger.error("Failed to clear work directory. %s", e)


def _explicit_flags(ctx: Context, names: Iterable[str]) -> Dict[str, Any]:
    """Collects the options which were really given on the command line,
    defaults filled in by click are left out so that the environment
    and the repository entry can still take over.
    """
    flags: Dict[str, Any] = {}
    for name in names:
        if ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE:
            flags[name] = ctx.params[name]
    return flags


def _decide_mode(is_quiet: bool, is_debug: bool, use_log_file=True):
    if not is_debug and not is_quiet:
        is_debug = bool(parse_bool(os.getenv(HELM_DEBUG_ENV, "")))
    if is_quiet:
        set_logging(level=logging.WARNING, use_log_file=use_log_file)
        logger.debug("Quiet mode enabled, "
                     "will only give warning and error logs.")
    elif is_debug:
        set_logging(level=logging.DEBUG, use_log_file=use_log_file)
        logger.debug("Debug mode enabled, "
                     "will give all debug logs for tracing.")
    else:
        set_logging(level=logging.INFO, use_log_file=use_log_file)
