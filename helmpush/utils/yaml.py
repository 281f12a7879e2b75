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
import importlib.resources
import json
import logging
from typing import Any, Dict

import jsonschema
import yaml

logger = logging.getLogger(__name__)

SCHEMA_PACKAGE = "helmpush"


def load_schema(schema: str, package: str = SCHEMA_PACKAGE) -> Dict:
    """Loads one of the JSON schemas shipped as package data,
    e.g. schemas/chart.json.
    """
    try:
        content = importlib.resources.files(package).joinpath(schema).read_bytes()
    except ImportError:
        logger.error("Unable to find package %s", package)
        raise
    except OSError:
        logger.error("Unable to read JSON schema %s", schema)
        raise
    try:
        return json.loads(content)
    except ValueError:
        logger.error("Unable to decode JSON schema %s", schema)
        raise


def validate_with_schema(data: Any, schema: Dict):
    try:
        jsonschema.Draft7Validator.check_schema(schema)
        jsonschema.Draft7Validator(schema).validate(data)
    except jsonschema.SchemaError:
        logger.error("Invalid JSON schema, can not validate")
        raise
    except jsonschema.ValidationError as e:
        logger.debug("Document does not match the schema: %s", e.message)
        raise


def read_yaml_from_file_path(file_path: str, schema: str) -> Any:
    """Loads the yaml document at file_path and checks it against the
    schema. An empty document loads as None.
    """
    with open(file_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    validate_with_schema(data, load_schema(schema))
    return data


def write_yaml(file_path: str, data: Any):
    # keep the key order of the loaded document
    with open(file_path, mode="w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
