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
import shutil
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import jsonschema
import semantic_version
import yaml

from helmpush.constants import CHART_FILE, VALUES_FILE, CHART_PACKAGE_SUFFIX
from helmpush.errors import ChartNotFound
from helmpush.pkgs.values import apply_overrides
from helmpush.utils.archive import (
    is_chart_archive, read_archive_chart_file,
    extract_chart_archive, create_chart_archive
)
from helmpush.utils.yaml import (
    read_yaml_from_file_path, validate_with_schema, load_schema, write_yaml
)

logger = logging.getLogger(__name__)

CHART_SCHEMA = "schemas/chart.json"


@dataclass(frozen=True)
class ChartPackage:
    path: str
    name: str
    version: str


def _validate_chart_meta(meta: Optional[Dict], chart_ref: str) -> Dict:
    try:
        validate_with_schema(meta, load_schema(CHART_SCHEMA))
    except jsonschema.ValidationError as e:
        raise ChartNotFound(
            chart_ref, "invalid {} in {}: {}".format(CHART_FILE, chart_ref, e.message), cause=e
        ) from e
    return meta


def _check_version(name: str, version: str):
    if not semantic_version.validate(version):
        logger.warning(
            "Version %s of chart %s is not a valid SemVer 2 version", version, name
        )


def load_chart_meta(chart_dir: str) -> Dict:
    chart_file = os.path.join(chart_dir, CHART_FILE)
    if not os.path.isfile(chart_file):
        raise ChartNotFound(chart_dir, "no {} found in {}".format(CHART_FILE, chart_dir))
    try:
        meta = read_yaml_from_file_path(chart_file, CHART_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ChartNotFound(
            chart_dir, "invalid {} in {}: {}".format(CHART_FILE, chart_dir, e.message), cause=e
        ) from e
    except yaml.YAMLError as e:
        raise ChartNotFound(
            chart_dir, "can not parse {} in {}: {}".format(CHART_FILE, chart_dir, e), cause=e
        ) from e
    return meta


def load_archive_meta(archive: str) -> Dict:
    try:
        meta = read_archive_chart_file(archive)
    except yaml.YAMLError as e:
        raise ChartNotFound(
            archive, "can not parse {} in {}: {}".format(CHART_FILE, archive, e), cause=e
        ) from e
    if meta is None:
        raise ChartNotFound(archive, "no {} found in archive {}".format(CHART_FILE, archive))
    return _validate_chart_meta(meta, archive)


def override_chart(
    chart_dir: str,
    version: Optional[str] = None,
    app_version: Optional[str] = None,
    overrides: Iterable[str] = ()
) -> Dict:
    """Rewrites the Chart.yaml and values.yaml of chart_dir with the given
    overrides. Only ever called on a scratch copy of the chart.
    """
    meta = load_chart_meta(chart_dir)
    if version or app_version:
        if version:
            logger.info("Overriding chart version %s with %s", meta.get("version"), version)
            meta["version"] = version
        if app_version:
            logger.info(
                "Overriding chart app version %s with %s", meta.get("appVersion"), app_version
            )
            meta["appVersion"] = app_version
        write_yaml(os.path.join(chart_dir, CHART_FILE), meta)

    overrides = list(overrides)
    if overrides:
        values_file = os.path.join(chart_dir, VALUES_FILE)
        values: Dict = {}
        if os.path.isfile(values_file):
            try:
                with open(values_file, encoding="utf-8") as f:
                    values = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ChartNotFound(
                    chart_dir,
                    "can not parse {} in {}: {}".format(VALUES_FILE, chart_dir, e),
                    cause=e
                ) from e
        values = apply_overrides(values, overrides)
        write_yaml(values_file, values)
    return meta


def package_chart(chart_dir: str, dest_dir: str) -> ChartPackage:
    meta = load_chart_meta(chart_dir)
    name = meta["name"]
    version = str(meta["version"])
    _check_version(name, version)
    dest = os.path.join(dest_dir, "{}-{}{}".format(name, version, CHART_PACKAGE_SUFFIX))
    logger.info("Packaging chart %s from %s", name, chart_dir)
    create_chart_archive(chart_dir, name, dest)
    logger.debug("Chart %s packaged at %s", name, dest)
    return ChartPackage(path=dest, name=name, version=version)


def prepare_chart_package(
    chart_ref: str,
    work_dir: str,
    version: Optional[str] = None,
    app_version: Optional[str] = None,
    overrides: Iterable[str] = ()
) -> ChartPackage:
    """Locates or builds the chart package to push.
    * chart_ref is either a packaged chart archive or a chart directory.
    * An archive without any override is pushed as it is.
    * Any override is applied to a copy of the chart inside work_dir,
      the original chart is never changed. The package is written to
      work_dir as well.
    """
    overrides = list(overrides)
    has_overrides = bool(version or app_version or overrides)
    chart_ref = os.path.expanduser(chart_ref)

    if is_chart_archive(chart_ref):
        meta = load_archive_meta(chart_ref)
        if not has_overrides:
            logger.info("Using chart package %s", chart_ref)
            return ChartPackage(
                path=chart_ref, name=meta["name"], version=str(meta["version"])
            )
        try:
            chart_dir = extract_chart_archive(chart_ref, os.path.join(work_dir, "src"))
        except ValueError as e:
            raise ChartNotFound(chart_ref, str(e), cause=e) from e
    elif os.path.isdir(chart_ref):
        chart_dir = chart_ref
        if has_overrides:
            load_chart_meta(chart_ref)
            copy_dir = os.path.join(
                work_dir, "src", os.path.basename(os.path.abspath(chart_ref))
            )
            shutil.copytree(chart_ref, copy_dir)
            chart_dir = copy_dir
    else:
        raise ChartNotFound(chart_ref)

    if has_overrides:
        override_chart(chart_dir, version, app_version, overrides)
    return package_chart(chart_dir, work_dir)
