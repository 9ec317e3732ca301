#!/usr/bin/env python3

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


class MetadataError(Exception):
    """Raised when the metadata record on disk cannot be read or parsed"""


@dataclass
class FileEntry:
    path: str
    hash: str
    translation_timestamp: int


@dataclass
class TranslationMeta:
    """Last seen commit plus one entry per translated file"""

    commit: str = ''
    files: List[FileEntry] = field(default_factory=list)

    def find(self, path: str) -> Optional[FileEntry]:
        for entry in self.files:
            if entry.path == path:
                return entry
        return None

    def is_translated(self, path: str, file_hash: str) -> bool:
        """True if this exact content of the file was already translated"""
        entry = self.find(path)
        return entry is not None and entry.hash == file_hash

    def record(self, entry: FileEntry) -> None:
        """Add an entry, replacing an older one for the same path"""
        self.files = [e for e in self.files if e.path != entry.path]
        self.files.append(entry)

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'TranslationMeta':
        if not isinstance(data, dict):
            raise MetadataError('metadata must be a JSON object')
        try:
            files = [
                FileEntry(
                    path=str(item['path']),
                    hash=str(item['hash']),
                    translation_timestamp=int(item['translation_timestamp']),
                )
                for item in data.get('files', [])
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise MetadataError(f"invalid file entry in metadata: {e}") from e
        return cls(commit=str(data.get('commit', '')), files=files)


class MetadataStore:
    """Loads and persists the translation metadata JSON file"""

    def __init__(self, meta_path: str):
        self.meta_path = Path(meta_path)

    def load(self) -> TranslationMeta:
        """Load the metadata record, or an empty one if it does not exist yet"""
        if not self.meta_path.exists():
            print(f"  ℹ️ No metadata found at {self.meta_path}, starting fresh")
            return TranslationMeta()

        try:
            text = self.meta_path.read_text(encoding='utf-8')
        except OSError as e:
            raise MetadataError(f"Error reading the metadata file @ {self.meta_path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MetadataError(f"Error parsing the metadata file @ {self.meta_path}: {e}") from e

        meta = TranslationMeta.from_dict(data)
        print(f"  📑 Loaded metadata with {len(meta.files)} translated file(s) from {self.meta_path}")
        return meta

    def save(self, meta: TranslationMeta) -> bool:
        """Write the metadata record, returning False if it could not be written"""
        temp_path = self.meta_path.with_name(self.meta_path.name + '.tmp')
        try:
            self.meta_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(meta.to_dict(), indent=2, ensure_ascii=False) + '\n', encoding='utf-8')
            os.replace(temp_path, self.meta_path)
            return True
        except OSError as e:
            print(f"  ❌ Error writing the metadata file @ {self.meta_path}: {e}")
            return False
