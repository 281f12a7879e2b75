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
import fnmatch
import logging
import os
import tarfile
from typing import Dict, List, Optional, Tuple

import yaml

from helmpush.constants import CHART_FILE, HELMIGNORE_FILE
from helmpush.utils.strings import remove_prefix

logger = logging.getLogger(__name__)


def is_chart_archive(path: str) -> bool:
    return os.path.isfile(path) and tarfile.is_tarfile(path)


def read_archive_chart_file(path: str) -> Optional[Dict]:
    """Reads the Chart.yaml of a packaged chart. Packaged charts carry
    exactly one top level directory, the chart file must sit directly
    in it (e.g. mychart/Chart.yaml). Returns None when there is none.
    """
    with tarfile.open(path, "r:*") as tar:
        for member in tar:
            parts = remove_prefix(member.name, "./").split("/")
            if len(parts) == 2 and parts[1] == CHART_FILE and member.isfile():
                f = tar.extractfile(member)
                if f is None:
                    return None
                with f:
                    return yaml.safe_load(f.read())
    return None


def extract_chart_archive(path: str, target_dir: str) -> str:
    """Extracts a chart archive into target_dir and returns the chart
    root directory. Members pointing outside of target_dir or being
    links are refused.
    """
    target = os.path.realpath(target_dir)
    with tarfile.open(path, "r:*") as tar:
        members = tar.getmembers()
        for member in members:
            dest = os.path.realpath(os.path.join(target, member.name))
            if os.path.commonpath([target, dest]) != target:
                raise ValueError("Illegal path {} in archive {}".format(member.name, path))
            if member.issym() or member.islnk():
                raise ValueError("Illegal link {} in archive {}".format(member.name, path))
        tar.extractall(target, members=members)

    roots = set()
    for member in members:
        name = remove_prefix(member.name, "./")
        if name:
            roots.add(name.split("/")[0])
    if len(roots) != 1:
        raise ValueError("Archive {} does not have a single chart root".format(path))
    return os.path.join(target, roots.pop())


class HelmIgnore(object):
    """Patterns from a chart's .helmignore file. Matches glob patterns
    against the path relative to the chart root and against the base
    name, a trailing slash only matches directories.
    """

    def __init__(self, patterns: List[Tuple[str, bool]]):
        self.__patterns = patterns

    @staticmethod
    def load(chart_dir: str) -> 'HelmIgnore':
        patterns: List[Tuple[str, bool]] = []
        ignore_file = os.path.join(chart_dir, HELMIGNORE_FILE)
        if os.path.isfile(ignore_file):
            with open(ignore_file, encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    if line.startswith("!"):
                        logger.warning(
                            "Negated pattern %s in %s is not supported, skipping it",
                            line, ignore_file
                        )
                        continue
                    dir_only = line.endswith("/")
                    patterns.append((line.rstrip("/").lstrip("/"), dir_only))
        return HelmIgnore(patterns)

    def ignored(self, rel_path: str, is_dir: bool) -> bool:
        base = os.path.basename(rel_path)
        for pattern, dir_only in self.__patterns:
            if dir_only and not is_dir:
                continue
            if fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(base, pattern):
                return True
        return False


def create_chart_archive(chart_dir: str, name: str, dest: str) -> str:
    """Packs the chart directory into the dest archive with every file
    placed under the chart name. The chart file itself is always kept.
    Symbolic links are followed, their targets are packed.
    """
    ignore = HelmIgnore.load(chart_dir)
    visited = set()
    with tarfile.open(dest, "w:gz", dereference=True) as tar:
        for root, dirs, files in os.walk(chart_dir, followlinks=True):
            real_root = os.path.realpath(root)
            if real_root in visited:
                logger.warning("Skipping %s, it links back into the chart", root)
                dirs[:] = []
                continue
            visited.add(real_root)
            rel_root = os.path.relpath(root, chart_dir)
            if rel_root == ".":
                rel_root = ""
            kept_dirs = []
            for d in sorted(dirs):
                rel = os.path.join(rel_root, d)
                if ignore.ignored(rel, True):
                    logger.debug("Ignoring directory %s", rel)
                else:
                    kept_dirs.append(d)
            dirs[:] = kept_dirs
            for f in sorted(files):
                rel = os.path.join(rel_root, f)
                if rel != CHART_FILE and ignore.ignored(rel, False):
                    logger.debug("Ignoring file %s", rel)
                    continue
                tar.add(
                    os.path.join(root, f), arcname="/".join([name] + rel.split(os.sep)),
                    recursive=False
                )
    return dest
