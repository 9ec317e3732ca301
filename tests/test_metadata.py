import unittest
import json
import os
import sys
import tempfile
from pathlib import Path

# Add the project root to path to allow direct import
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from autodocs.metadata import FileEntry, MetadataError, MetadataStore, TranslationMeta

HASH_A = "a" * 64
HASH_B = "b" * 64


class TestTranslationMeta(unittest.TestCase):

    def test_lookup_requires_matching_path_and_hash(self):
        meta = TranslationMeta(files=[FileEntry("a.md", HASH_A, 1700000000)])

        self.assertTrue(meta.is_translated("a.md", HASH_A))
        self.assertFalse(meta.is_translated("a.md", HASH_B))
        self.assertFalse(meta.is_translated("b.md", HASH_A))

    def test_record_replaces_entry_for_same_path(self):
        meta = TranslationMeta()
        meta.record(FileEntry("a.md", HASH_A, 1))
        meta.record(FileEntry("b.md", HASH_A, 2))
        meta.record(FileEntry("a.md", HASH_B, 3))

        self.assertEqual([e.path for e in meta.files], ["b.md", "a.md"])
        self.assertEqual(meta.find("a.md").hash, HASH_B)

    def test_from_dict_rejects_incomplete_entries(self):
        with self.assertRaises(MetadataError):
            TranslationMeta.from_dict({"commit": "", "files": [{"path": "a.md"}]})

    def test_from_dict_rejects_non_object(self):
        with self.assertRaises(MetadataError):
            TranslationMeta.from_dict(["not", "an", "object"])


class TestMetadataStore(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.meta_path = Path(self.temp_dir.name) / "book.meta.json"
        self.store = MetadataStore(str(self.meta_path))

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_missing_file_loads_empty_record(self):
        meta = self.store.load()
        self.assertEqual(meta.commit, "")
        self.assertEqual(meta.files, [])

    def test_save_writes_expected_json_shape(self):
        meta = TranslationMeta(commit="abc123", files=[FileEntry("docs/a.md", HASH_A, 1700000000)])

        self.assertTrue(self.store.save(meta))

        data = json.loads(self.meta_path.read_text(encoding='utf-8'))
        self.assertEqual(data, {
            "commit": "abc123",
            "files": [{"path": "docs/a.md", "hash": HASH_A, "translation_timestamp": 1700000000}],
        })
        self.assertFalse(self.meta_path.with_name("book.meta.json.tmp").exists())

    def test_save_then_load(self):
        meta = TranslationMeta(commit="abc123", files=[FileEntry("a.md", HASH_A, 42)])
        self.store.save(meta)

        loaded = self.store.load()

        self.assertEqual(loaded, meta)

    def test_malformed_json_is_fatal(self):
        self.meta_path.write_text("{not json", encoding='utf-8')
        with self.assertRaises(MetadataError):
            self.store.load()

    def test_save_failure_is_reported_not_raised(self):
        # A plain file where the parent directory should be
        blocked = MetadataStore(str(Path(self.temp_dir.name) / "blocked" / "x.meta.json"))
        (Path(self.temp_dir.name) / "blocked").write_text("file, not a directory", encoding='utf-8')

        self.assertFalse(blocked.save(TranslationMeta()))


if __name__ == '__main__':
    unittest.main()
