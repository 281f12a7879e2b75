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
from click import ClickException, Abort
from helmpush.constants import PROG_NAME
from helmpush.cmd.cmd_push import push

import sys


def cli(args=None):
    """Entry point of the helm plugin. Usage errors reported by click
    exit with 1 like every other failure of the push.
    """
    try:
        rc = push.main(args=args, prog_name=PROG_NAME, standalone_mode=False)
    except ClickException as e:
        e.show()
        sys.exit(1)
    except Abort:
        sys.exit(1)
    sys.exit(rc or 0)
