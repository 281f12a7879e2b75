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
import unittest

from helmpush.config import build_push_config, PushConfig
from helmpush.repo import DirectURL, NamedRepository, RepositoryEntry
from tests.constants import TEST_REPO_URL

ENTRY = RepositoryEntry(
    name="helm-local",
    url=TEST_REPO_URL,
    username="stored-user",
    password="stored-pass",
    ca_file="/stored/ca.crt",
    cert_file="/stored/tls.crt",
    key_file="/stored/tls.key",
    insecure_skip_tls_verify=True,
)


class PushConfigTest(unittest.TestCase):
    def test_defaults(self):
        conf = build_push_config("mychart", DirectURL(TEST_REPO_URL), {}, {})
        self.assertEqual(PushConfig(chart_name="mychart", repository_url=TEST_REPO_URL), conf)
        self.assertFalse(conf.insecure_skip_verify)
        self.assertFalse(conf.skip_reindex)

    def test_environment_only(self):
        environ = {
            "HELM_REPO_PATH": "env/path",
            "HELM_REPO_USERNAME": "env-user",
            "HELM_REPO_PASSWORD": "env-pass",
            "HELM_REPO_ACCESS_TOKEN": "env-token",
            "HELM_REPO_API_KEY": "env-key",
            "HELM_REPO_CA_FILE": "/env/ca.crt",
            "HELM_REPO_CERT_FILE": "/env/tls.crt",
            "HELM_REPO_KEY_FILE": "/env/tls.key",
            "HELM_REPO_INSECURE": "true",
            "HELM_REPO_SKIP_REINDEX": "1",
        }
        conf = build_push_config("mychart", DirectURL(TEST_REPO_URL), {}, environ)
        self.assertEqual("env/path", conf.path)
        self.assertEqual("env-user", conf.username)
        self.assertEqual("env-pass", conf.password)
        self.assertEqual("env-token", conf.access_token)
        self.assertEqual("env-key", conf.api_key)
        self.assertEqual("/env/ca.crt", conf.ca_file)
        self.assertEqual("/env/tls.crt", conf.cert_file)
        self.assertEqual("/env/tls.key", conf.key_file)
        self.assertTrue(conf.insecure_skip_verify)
        self.assertTrue(conf.skip_reindex)

    def test_flag_wins_over_environment(self):
        environ = {
            "HELM_REPO_USERNAME": "env-user",
            "HELM_REPO_PATH": "env/path",
            "HELM_REPO_INSECURE": "true",
            "HELM_REPO_SKIP_REINDEX": "false",
        }
        flags = {
            "username": "flag-user",
            "path": "flag/path",
            "insecure_skip_verify": False,
            "skip_reindex": True,
        }
        conf = build_push_config("mychart", DirectURL(TEST_REPO_URL), flags, environ)
        self.assertEqual("flag-user", conf.username)
        self.assertEqual("flag/path", conf.path)
        self.assertFalse(conf.insecure_skip_verify)
        self.assertTrue(conf.skip_reindex)

    def test_empty_flag_counts_as_unset(self):
        conf = build_push_config(
            "mychart", DirectURL(TEST_REPO_URL),
            {"username": ""}, {"HELM_REPO_USERNAME": "env-user"}
        )
        self.assertEqual("env-user", conf.username)

    def test_repository_entry_seeds_defaults(self):
        conf = build_push_config("mychart", NamedRepository(ENTRY), {}, {})
        self.assertEqual(TEST_REPO_URL, conf.repository_url)
        self.assertEqual("stored-user", conf.username)
        self.assertEqual("stored-pass", conf.password)
        self.assertEqual("/stored/ca.crt", conf.ca_file)
        self.assertEqual("/stored/tls.crt", conf.cert_file)
        self.assertEqual("/stored/tls.key", conf.key_file)
        self.assertTrue(conf.insecure_skip_verify)

    def test_environment_wins_over_repository_entry(self):
        environ = {
            "HELM_REPO_USERNAME": "env-user",
            "HELM_REPO_CA_FILE": "/env/ca.crt",
            "HELM_REPO_INSECURE": "false",
        }
        conf = build_push_config("mychart", NamedRepository(ENTRY), {}, environ)
        self.assertEqual("env-user", conf.username)
        self.assertEqual("stored-pass", conf.password)
        self.assertEqual("/env/ca.crt", conf.ca_file)
        self.assertEqual("/stored/tls.crt", conf.cert_file)
        self.assertFalse(conf.insecure_skip_verify)

    def test_flag_wins_over_everything(self):
        environ = {"HELM_REPO_PASSWORD": "env-pass", "HELM_REPO_KEY_FILE": "/env/tls.key"}
        flags = {"password": "flag-pass", "key_file": "/flag/tls.key"}
        conf = build_push_config("mychart", NamedRepository(ENTRY), flags, environ)
        self.assertEqual("flag-pass", conf.password)
        self.assertEqual("/flag/tls.key", conf.key_file)
        self.assertEqual("stored-user", conf.username)

    def test_invalid_boolean_environment(self):
        with self.assertLogs("helmpush.config", level="WARNING") as logs:
            conf = build_push_config(
                "mychart", NamedRepository(ENTRY), {},
                {"HELM_REPO_INSECURE": "yes please"}
            )
        self.assertFalse(conf.insecure_skip_verify)
        self.assertIn("HELM_REPO_INSECURE", logs.output[0])

    def test_chart_overrides(self):
        flags = {
            "chart_version": "1.2.3",
            "app_version": "2.0",
            "overrides": ("image.tag=1.2.3", "replicas=3"),
        }
        conf = build_push_config("./mychart", DirectURL(TEST_REPO_URL), flags, {})
        self.assertEqual("./mychart", conf.chart_name)
        self.assertEqual("1.2.3", conf.chart_version)
        self.assertEqual("2.0", conf.app_version)
        self.assertEqual(("image.tag=1.2.3", "replicas=3"), conf.overrides)

    def test_config_is_immutable(self):
        conf = build_push_config("mychart", DirectURL(TEST_REPO_URL), {}, {})
        with self.assertRaises(AttributeError):
            conf.username = "changed"
