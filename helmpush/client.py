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
from typing import Any, Dict, Tuple, Union
from urllib.parse import quote, urlparse, urlunparse

import requests
import urllib3

from helmpush.constants import (
    API_KEY_HEADER, CHECKSUM_SHA1_HEADER, CHECKSUM_SHA256_HEADER,
    REINDEX_API_PATH, REINDEX_ACTION
)
from helmpush.errors import (
    ArgumentError, InvalidTLSConfig, NetworkError, ResponseParseError
)
from helmpush.utils.files import digest, is_readable_file, HashType

logger = logging.getLogger(__name__)


class ArtifactoryClient(object):
    """The ArtifactoryClient pushes chart packages into an Artifactory helm
    repository and asks the repository to rebuild its index afterwards.
    Responses are handed back as they are, deciding on success or
    failure is up to the caller.
    """

    def __init__(
        self, url: str, path="",
        username="", password="",
        access_token="", api_key="",
        ca_file="", cert_file="", key_file="",
        insecure_skip_verify=False
    ) -> None:
        self.__url = url.rstrip("/")
        self.__path = path.strip("/") if path else ""
        self.__username = username
        self.__password = password
        self.__access_token = access_token
        self.__api_key = api_key
        self.__verify = self.__init_verify(ca_file, insecure_skip_verify)
        self.__cert = self.__init_cert(cert_file, key_file)
        self.__session = requests.Session()

    def __init_verify(self, ca_file: str, insecure_skip_verify: bool) -> Union[bool, str]:
        if ca_file and not is_readable_file(ca_file):
            raise InvalidTLSConfig("can not read CA file {}".format(ca_file))
        if insecure_skip_verify:
            logger.warning("Certificate verification of %s is disabled!", self.__url)
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
            return False
        if ca_file:
            logger.debug("Using CA bundle %s", ca_file)
            return ca_file
        return True

    def __init_cert(self, cert_file: str, key_file: str) -> Union[None, Tuple[str, str]]:
        if not cert_file and not key_file:
            return None
        if not cert_file or not key_file:
            raise InvalidTLSConfig(
                "both a client certificate and a key file are needed, "
                "got cert file \"{}\" and key file \"{}\"".format(cert_file, key_file)
            )
        for f in (cert_file, key_file):
            if not is_readable_file(f):
                raise InvalidTLSConfig("can not read TLS file {}".format(f))
        logger.debug("Using client certificate %s", cert_file)
        return (cert_file, key_file)

    def __auth(self) -> Dict[str, Any]:
        # access token > basic auth > api key, only one of them is sent
        if self.__access_token:
            return {"headers": {"Authorization": "Bearer " + self.__access_token}}
        if self.__username:
            return {"auth": (self.__username, self.__password)}
        if self.__api_key:
            return {"headers": {API_KEY_HEADER: self.__api_key}}
        return {}

    def __request(self, method: str, url: str, **kwargs) -> requests.Response:
        auth = self.__auth()
        headers = dict(kwargs.pop("headers", {}))
        headers.update(auth.get("headers", {}))
        try:
            return self.__session.request(
                method, url,
                headers=headers,
                auth=auth.get("auth"),
                verify=self.__verify,
                cert=self.__cert,
                **kwargs
            )
        except (requests.exceptions.ChunkedEncodingError,
                requests.exceptions.ContentDecodingError) as e:
            raise ResponseParseError(
                "can not read response of {} {}: {}".format(method, url, e), cause=e
            ) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError("{} {} failed: {}".format(method, url, e), cause=e) from e

    def upload_url(self, file_name: str) -> str:
        parts = [self.__url]
        if self.__path:
            parts.append(self.__path)
        parts.append(quote(file_name))
        return "/".join(parts)

    def reindex_url(self) -> str:
        """The helm reindex API sits beside the repository itself:
        https://host/artifactory/helm-local ->
        https://host/artifactory/api/helm/helm-local/reindex
        """
        parsed = urlparse(self.__url)
        segments = [s for s in parsed.path.split("/") if s]
        if not segments:
            raise ArgumentError(
                "can not find the repository key in URL {}".format(self.__url)
            )
        repo_key = segments[-1]
        path = "/".join([""] + segments[:-1] + [REINDEX_API_PATH, repo_key, REINDEX_ACTION])
        return urlunparse((parsed.scheme, parsed.netloc, path, "", "", ""))

    def upload_chart_package(self, chart_name: str, package_path: str) -> requests.Response:
        url = self.upload_url(os.path.basename(package_path))
        headers = {
            CHECKSUM_SHA1_HEADER: digest(package_path),
            CHECKSUM_SHA256_HEADER: digest(package_path, HashType.SHA256),
        }
        logger.info("Pushing chart %s to %s", chart_name, url)
        with open(package_path, "rb") as data:
            return self.__request("PUT", url, headers=headers, data=data)

    def reindex_artifactory_repo(self) -> requests.Response:
        url = self.reindex_url()
        logger.info("Reindexing repository with %s", url)
        return self.__request("POST", url)
