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
import os
from unittest import mock

import requests

from helmpush.client import ArtifactoryClient
from helmpush.errors import (
    ArgumentError, InvalidTLSConfig, NetworkError, ResponseParseError
)
from helmpush.utils.files import digest, HashType
from tests.base import BaseTest, overwrite_file
from tests.constants import TEST_REPO_URL, TEST_REINDEX_URL


class ArtifactoryClientTest(BaseTest):
    def setUp(self):
        super().setUp()
        self.package = self.create_chart_package("mychart", "0.1.0")
        patcher = mock.patch("helmpush.client.requests.Session")
        self.mock_session = patcher.start().return_value
        self.addCleanup(patcher.stop)
        self.mock_session.request.return_value = mock.MagicMock(status_code=201)

    def __tls_file(self, name: str) -> str:
        path = os.path.join(self.get_temp_dir(), name)
        overwrite_file(path, "-----BEGIN CERTIFICATE-----\n")
        return path

    def __request_kwargs(self):
        return self.mock_session.request.call_args[1]

    def test_upload_url(self):
        client = ArtifactoryClient(TEST_REPO_URL + "/")
        self.assertEqual(TEST_REPO_URL + "/mychart-0.1.0.tgz", client.upload_url("mychart-0.1.0.tgz"))
        client = ArtifactoryClient(TEST_REPO_URL, path="/team/charts/")
        self.assertEqual(
            TEST_REPO_URL + "/team/charts/mychart-0.1.0.tgz",
            client.upload_url("mychart-0.1.0.tgz")
        )

    def test_reindex_url(self):
        self.assertEqual(TEST_REINDEX_URL, ArtifactoryClient(TEST_REPO_URL).reindex_url())
        self.assertEqual(
            "http://localhost:8081/api/helm/helm/reindex",
            ArtifactoryClient("http://localhost:8081/helm/").reindex_url()
        )
        with self.assertRaises(ArgumentError):
            ArtifactoryClient("https://artifactory.example.com").reindex_url()

    def test_upload_chart_package(self):
        client = ArtifactoryClient(TEST_REPO_URL, path="stable")
        resp = client.upload_chart_package("mychart", self.package)
        self.assertIs(self.mock_session.request.return_value, resp)
        args, kwargs = self.mock_session.request.call_args
        self.assertEqual(("PUT", TEST_REPO_URL + "/stable/mychart-0.1.0.tgz"), args)
        self.assertEqual(digest(self.package), kwargs["headers"]["X-Checksum-Sha1"])
        self.assertEqual(
            digest(self.package, HashType.SHA256), kwargs["headers"]["X-Checksum-Sha256"]
        )
        self.assertEqual(os.path.realpath(self.package), os.path.realpath(kwargs["data"].name))
        self.assertTrue(kwargs["verify"])
        self.assertIsNone(kwargs["cert"])
        self.assertIsNone(kwargs["auth"])
        self.assertNotIn("Authorization", kwargs["headers"])

    def test_reindex(self):
        client = ArtifactoryClient(TEST_REPO_URL)
        client.reindex_artifactory_repo()
        args, _ = self.mock_session.request.call_args
        self.assertEqual(("POST", TEST_REINDEX_URL), args)

    def test_access_token_wins(self):
        client = ArtifactoryClient(
            TEST_REPO_URL, username="user", password="pass",
            access_token="token", api_key="key"
        )
        client.reindex_artifactory_repo()
        kwargs = self.__request_kwargs()
        self.assertEqual("Bearer token", kwargs["headers"]["Authorization"])
        self.assertIsNone(kwargs["auth"])
        self.assertNotIn("X-JFrog-Art-Api", kwargs["headers"])

    def test_basic_auth_wins_over_api_key(self):
        client = ArtifactoryClient(
            TEST_REPO_URL, username="user", password="pass", api_key="key"
        )
        client.upload_chart_package("mychart", self.package)
        kwargs = self.__request_kwargs()
        self.assertEqual(("user", "pass"), kwargs["auth"])
        self.assertNotIn("X-JFrog-Art-Api", kwargs["headers"])
        self.assertNotIn("Authorization", kwargs["headers"])

    def test_api_key(self):
        client = ArtifactoryClient(TEST_REPO_URL, api_key="key")
        client.reindex_artifactory_repo()
        kwargs = self.__request_kwargs()
        self.assertEqual("key", kwargs["headers"]["X-JFrog-Art-Api"])
        self.assertIsNone(kwargs["auth"])

    def test_tls_settings(self):
        ca = self.__tls_file("ca.crt")
        cert = self.__tls_file("tls.crt")
        key = self.__tls_file("tls.key")
        client = ArtifactoryClient(TEST_REPO_URL, ca_file=ca, cert_file=cert, key_file=key)
        client.reindex_artifactory_repo()
        kwargs = self.__request_kwargs()
        self.assertEqual(ca, kwargs["verify"])
        self.assertEqual((cert, key), kwargs["cert"])

    def test_insecure(self):
        client = ArtifactoryClient(TEST_REPO_URL, insecure_skip_verify=True)
        client.reindex_artifactory_repo()
        self.assertFalse(self.__request_kwargs()["verify"])

    def test_invalid_tls_config(self):
        cert = self.__tls_file("tls.crt")
        key = self.__tls_file("tls.key")
        with self.assertRaises(InvalidTLSConfig):
            ArtifactoryClient(TEST_REPO_URL, cert_file=cert)
        with self.assertRaises(InvalidTLSConfig):
            ArtifactoryClient(TEST_REPO_URL, key_file=key)
        missing = os.path.join(self.get_temp_dir(), "missing.crt")
        with self.assertRaises(InvalidTLSConfig):
            ArtifactoryClient(TEST_REPO_URL, ca_file=missing)
        with self.assertRaises(InvalidTLSConfig):
            ArtifactoryClient(TEST_REPO_URL, cert_file=missing, key_file=key)

    def test_network_error(self):
        self.mock_session.request.side_effect = requests.exceptions.ConnectionError("refused")
        client = ArtifactoryClient(TEST_REPO_URL)
        with self.assertRaises(NetworkError) as ctx:
            client.upload_chart_package("mychart", self.package)
        self.assertIsInstance(ctx.exception.cause, requests.exceptions.ConnectionError)
        self.assertEqual(1, self.mock_session.request.call_count)

    def test_broken_response_body(self):
        self.mock_session.request.side_effect = requests.exceptions.ChunkedEncodingError("cut")
        client = ArtifactoryClient(TEST_REPO_URL)
        with self.assertRaises(ResponseParseError):
            client.reindex_artifactory_repo()
