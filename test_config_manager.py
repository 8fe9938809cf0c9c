import json
import os
import tempfile
import unittest
from unittest import mock

import config_manager
from config import GlobalConfig


class TestProjectConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.repo = self.tmp.name
        os.makedirs(os.path.join(self.repo, ".git"))
        self.config = GlobalConfig()

    def tearDown(self):
        self.tmp.cleanup()

    def test_config_lives_in_git_dir(self):
        path = config_manager.get_project_config_path(self.repo, self.config)
        self.assertEqual(path, os.path.join(os.path.abspath(self.repo), ".git", "dummy_fixup.json"))

    def test_save_and_load(self):
        data = {"base_branch": "develop", "remote": "upstream"}
        self.assertTrue(config_manager.save_project_config(self.repo, self.config, data))
        self.assertEqual(config_manager.load_project_config(self.repo, self.config), data)

    def test_missing_config_is_empty(self):
        self.assertEqual(config_manager.load_project_config(self.repo, self.config), {})

    def test_corrupt_config_is_empty(self):
        path = config_manager.get_project_config_path(self.repo, self.config)
        with open(path, "w", encoding="utf-8") as f:
            f.write("{not json")
        self.assertEqual(config_manager.load_project_config(self.repo, self.config), {})

    def test_non_object_config_is_empty(self):
        path = config_manager.get_project_config_path(self.repo, self.config)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(["main"], f)
        self.assertEqual(config_manager.load_project_config(self.repo, self.config), {})

    def test_wizard_saves_answers(self):
        answers = iter(["develop", "", "docs/README.md", "", "bogus"])
        with mock.patch("builtins.input", lambda prompt: next(answers)), \
                mock.patch("builtins.print"):
            self.assertTrue(config_manager.run_interactive_config_wizard(self.repo, self.config))

        saved = config_manager.load_project_config(self.repo, self.config)
        self.assertEqual(saved["base_branch"], "develop")
        self.assertEqual(saved["remote"], self.config.REMOTE)
        self.assertEqual(saved["file"], "docs/README.md")
        self.assertEqual(saved["message"], self.config.DUMMY_COMMIT_MESSAGE)
        self.assertEqual(saved["insert_mode"], "append")

    def test_wizard_rejects_non_repo(self):
        with tempfile.TemporaryDirectory() as plain_dir:
            self.assertFalse(config_manager.run_interactive_config_wizard(plain_dir, self.config))


if __name__ == "__main__":
    unittest.main()
