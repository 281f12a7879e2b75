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
import sys

from helmpush.constants import (
    HELMPUSH_LOGGING_FMT, DEFAULT_ERRORS_LOG, ERROR_LOG_DIR_ENV
)


def set_logging(name="helmpush", level=logging.INFO, handler=None, use_log_file=True):
    # create logger
    logger = logging.getLogger(name)
    for hdlr in list(logger.handlers):  # make a copy so it doesn't change
        logger.removeHandler(hdlr)

    logger.setLevel(level)

    # create formatter
    formatter = logging.Formatter(fmt=HELMPUSH_LOGGING_FMT)

    if not handler:
        # stdout is kept for the command results
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)

    logger.addHandler(handler)

    if use_log_file:
        set_log_file_handler(logger)


def set_log_file_handler(logger: logging.Logger):
    log_loc = os.getenv(ERROR_LOG_DIR_ENV)
    if not log_loc:
        return
    os.makedirs(log_loc, exist_ok=True)
    error_log = os.path.join(log_loc, "helm-push-artifactory." + DEFAULT_ERRORS_LOG)
    handler = logging.FileHandler(error_log)
    formatter = logging.Formatter(fmt=HELMPUSH_LOGGING_FMT)
    handler.setFormatter(formatter)
    handler.setLevel(logging.WARN)
    logger.addHandler(handler)
