import unittest
from unittest.mock import patch
import os
import sys
import tempfile
from pathlib import Path

# Add the project root to path to allow direct import
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from autodocs.config import Config, ConfigError

CONFIG_YAML = """
repo: https://github.com/example/hvisor-book.git
branch: main
engine:
  name: openai
  url: https://api.example.com/v1
  model: test-model
  api_key_file: {key_file}
filter:
  target: "*.md *.txt"
  include: []
  exclude: ["draft"]
"""


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.test_dir = Path(self.temp_dir.name)
        self.key_file = self.test_dir / "key.txt"
        self.key_file.write_text("  sk-test-key-1234\n", encoding='utf-8')

    def tearDown(self):
        self.temp_dir.cleanup()

    def write_config(self, text: str) -> str:
        path = self.test_dir / "config.yml"
        path.write_text(text, encoding='utf-8')
        return str(path)

    @patch.dict(os.environ, {}, clear=True)
    def test_from_file_reads_all_sections(self):
        config = Config.from_file(self.write_config(CONFIG_YAML.format(key_file=self.key_file)))

        self.assertEqual(config.repo, 'https://github.com/example/hvisor-book.git')
        self.assertEqual(config.branch, 'main')
        self.assertEqual(config.engine.model, 'test-model')
        self.assertEqual(config.engine.url, 'https://api.example.com/v1')
        self.assertEqual(config.engine.api_key, 'sk-test-key-1234')
        self.assertEqual(config.engine.target_lang, 'English')
        self.assertEqual(config.filter.target, '*.md *.txt')
        self.assertEqual(config.filter.exclude, ['draft'])
        self.assertEqual(config.filter.match, 'suffix')
        self.assertIsNone(config.publish)
        self.assertEqual(config.workspace, './workspace')

    @patch.dict(os.environ, {'WORKSPACE': ' /tmp/ws ', 'API_KEY': ' env-key '}, clear=True)
    def test_environment_fills_workspace_and_api_key(self):
        config = Config.from_dict({
            'repo': 'https://github.com/example/book.git',
            'filter': {'target': '*.md'},
        })

        self.assertEqual(config.workspace, '/tmp/ws')
        self.assertEqual(config.engine.api_key, 'env-key')

    def test_explicit_workspace_wins_over_default(self):
        config = Config.from_dict({
            'repo': 'repo',
            'workspace': 'custom-ws',
            'filter': {'target': '*.md'},
            'engine': {'api_key': 'k'},
        })
        self.assertEqual(config.workspace, 'custom-ws')

    def test_publish_section(self):
        config = Config.from_dict({
            'repo': 'repo',
            'filter': {'target': '*.md'},
            'engine': {'api_key': 'k'},
            'publish': {'path': '../book-en', 'push': False},
        })
        self.assertEqual(config.publish.path, '../book-en')
        self.assertFalse(config.publish.push)
        self.assertEqual(config.publish.message, 'Auto-translation update')

    def test_missing_config_file_is_an_error(self):
        with self.assertRaises(ConfigError):
            Config.from_file(str(self.test_dir / "missing.yml"))

    def test_malformed_yaml_is_an_error(self):
        with self.assertRaises(ConfigError):
            Config.from_file(self.write_config("repo: [unclosed\n"))

    def test_missing_repo_is_an_error(self):
        with self.assertRaises(ConfigError):
            Config.from_dict({'filter': {'target': '*.md'}, 'engine': {'api_key': 'k'}})

    def test_unknown_key_is_an_error(self):
        with self.assertRaises(ConfigError):
            Config.from_dict({'repo': 'r', 'filter': {'target': '*.md', 'bogus': 1}})

    def test_invalid_match_mode_is_an_error(self):
        with self.assertRaises(ConfigError):
            Config.from_dict({'repo': 'r', 'filter': {'target': '*.md', 'match': 'regex'}})

    def test_unreadable_api_key_file_is_an_error(self):
        with self.assertRaises(ConfigError):
            Config.from_dict({
                'repo': 'r',
                'filter': {'target': '*.md'},
                'engine': {'api_key_file': str(self.test_dir / "nope.txt")},
            })

    def test_prompt_read_from_file(self):
        prompt_file = self.test_dir / "prompt.txt"
        prompt_file.write_text("Translate into formal German:", encoding='utf-8')

        config = Config.from_dict({
            'repo': 'r',
            'filter': {'target': '*.md'},
            'engine': {'api_key': 'k', 'prompt': str(prompt_file)},
        })
        self.assertEqual(config.engine.prompt, "Translate into formal German:")


if __name__ == '__main__':
    unittest.main()
