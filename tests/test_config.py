import os
from pathlib import Path
import tempfile
import unittest
from unittest.mock import patch

from sagmal.config import (
    get_api_key,
    load_config_inputs,
    load_env_file,
    load_environment,
    load_rc,
)
from sagmal.errors import InvalidConfigError, MissingCredentialError


class LoadEnvFileTests(unittest.TestCase):
    def test_loads_simple_key_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            env_path = Path(tmp) / ".env"
            env_path.write_text("FOO=bar\nEMPTY=\n# comment\nQUOTED='a b'\n")

            with patch.dict(os.environ, {}, clear=True):
                load_env_file(env_path)
                self.assertEqual(os.environ["FOO"], "bar")
                self.assertEqual(os.environ["EMPTY"], "")
                self.assertEqual(os.environ["QUOTED"], "a b")

    def test_does_not_override_existing_variables(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            env_path = Path(tmp) / ".env"
            env_path.write_text("FOO=from_file\n")

            with patch.dict(os.environ, {"FOO": "from_env"}, clear=True):
                load_env_file(env_path)
                self.assertEqual(os.environ["FOO"], "from_env")

    def test_missing_file_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with patch.dict(os.environ, {}, clear=True):
                load_env_file(Path(tmp) / ".env")
                self.assertEqual(dict(os.environ), {})

    def test_working_directory_takes_precedence_over_home(self) -> None:
        with tempfile.TemporaryDirectory() as home, tempfile.TemporaryDirectory() as cwd:
            (Path(home) / ".env").write_text("SAGMAL_DEEPL_API_KEY=home\nONLY_HOME=1\n")
            (Path(cwd) / ".env").write_text("SAGMAL_DEEPL_API_KEY=local\n")

            with patch.dict(os.environ, {}, clear=True):
                load_environment(home=Path(home), cwd=Path(cwd))
                self.assertEqual(os.environ["SAGMAL_DEEPL_API_KEY"], "local")
                self.assertEqual(os.environ["ONLY_HOME"], "1")


class ApiKeyTests(unittest.TestCase):
    def test_reads_key(self) -> None:
        self.assertEqual(get_api_key({"SAGMAL_DEEPL_API_KEY": "abc:fx"}), "abc:fx")

    def test_missing_key_raises(self) -> None:
        with self.assertRaises(MissingCredentialError):
            get_api_key({})

    def test_empty_key_raises(self) -> None:
        with self.assertRaises(MissingCredentialError):
            get_api_key({"SAGMAL_DEEPL_API_KEY": ""})


class LoadRcTests(unittest.TestCase):
    def test_missing_file_yields_empty_mapping(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(load_rc(Path(tmp) / ".sagmalrc.json"), {})

    def test_unknown_keys_pass_through(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / ".sagmalrc.json"
            path.write_text('{"deepL": {"targetLang": "ja"}, "somethingElse": [1, 2]}')
            self.assertEqual(load_rc(path), {"deepL": {"targetLang": "ja"}, "somethingElse": [1, 2]})

    def test_malformed_json_names_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / ".sagmalrc.json"
            path.write_text("{not json")
            with self.assertRaises(InvalidConfigError) as ctx:
                load_rc(path)
            self.assertIn(str(path), str(ctx.exception))

    def test_non_object_root_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / ".sagmalrc.json"
            for content, kind in (("[1, 2]", "array"), ('"text"', "str"), ("null", "NoneType")):
                path.write_text(content)
                with self.assertRaises(InvalidConfigError) as ctx:
                    load_rc(path)
                self.assertIn(kind, str(ctx.exception))

    def test_load_config_inputs_reads_both_scopes(self) -> None:
        with tempfile.TemporaryDirectory() as home, tempfile.TemporaryDirectory() as cwd:
            (Path(home) / ".sagmalrc.json").write_text('{"copyToClipboard": true}')
            inputs = load_config_inputs(home=Path(home), cwd=Path(cwd))
            self.assertEqual(inputs.home, {"copyToClipboard": True})
            self.assertEqual(inputs.local, {})


if __name__ == "__main__":
    unittest.main()
