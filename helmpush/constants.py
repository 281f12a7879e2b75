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
PROG_NAME = "helm push-artifactory"

HELMPUSH_LOGGING_FMT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_ERRORS_LOG = "errors.log"
ERROR_LOG_DIR_ENV = "HELM_PUSH_ERROR_LOG_DIR"
HELM_DEBUG_ENV = "HELM_DEBUG"

# Environment fallbacks for the push flags
ENV_PATH = "HELM_REPO_PATH"
ENV_USERNAME = "HELM_REPO_USERNAME"
ENV_PASSWORD = "HELM_REPO_PASSWORD"
ENV_ACCESS_TOKEN = "HELM_REPO_ACCESS_TOKEN"
ENV_API_KEY = "HELM_REPO_API_KEY"
ENV_CA_FILE = "HELM_REPO_CA_FILE"
ENV_CERT_FILE = "HELM_REPO_CERT_FILE"
ENV_KEY_FILE = "HELM_REPO_KEY_FILE"
ENV_INSECURE = "HELM_REPO_INSECURE"
ENV_SKIP_REINDEX = "HELM_REPO_SKIP_REINDEX"

# Helm repository configuration store
REPOSITORY_CONFIG_ENV = "HELM_REPOSITORY_CONFIG"
REPOSITORY_CONFIG_FILE = "repositories.yaml"

# Chart layout
CHART_FILE = "Chart.yaml"
VALUES_FILE = "values.yaml"
HELMIGNORE_FILE = ".helmignore"
CHART_PACKAGE_SUFFIX = ".tgz"
WORK_DIR_PREFIX = "helm-push-artifactory-"

# Artifactory protocol
API_KEY_HEADER = "X-JFrog-Art-Api"
CHECKSUM_SHA1_HEADER = "X-Checksum-Sha1"
CHECKSUM_SHA256_HEADER = "X-Checksum-Sha256"
REINDEX_API_PATH = "api/helm"
REINDEX_ACTION = "reindex"
PUSH_SUCCESS_STATUS = 201
REINDEX_SUCCESS_STATUS = 200
