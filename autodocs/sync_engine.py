#!/usr/bin/env python3

import time
from dataclasses import dataclass, field
from typing import List

from .file_processor import FileProcessor
from .metadata import FileEntry, MetadataStore, TranslationMeta


TRANSLATED = 'translated'
SKIPPED = 'skipped'
COPIED = 'copied'
FAILED = 'failed'


@dataclass
class FileResult:
    path: str
    status: str
    reason: str = ''
    translatable: bool = True


@dataclass
class SyncReport:
    """Outcome of one pass over the repository, one result per file"""

    results: List[FileResult] = field(default_factory=list)

    def _count(self, status: str) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def translated(self) -> int:
        return self._count(TRANSLATED)

    @property
    def skipped(self) -> int:
        return self._count(SKIPPED)

    @property
    def copied(self) -> int:
        return self._count(COPIED)

    @property
    def failed(self) -> int:
        return self._count(FAILED)

    @property
    def total(self) -> int:
        """Number of translatable files seen"""
        return sum(1 for r in self.results if r.translatable)

    @property
    def failures(self) -> List[FileResult]:
        return [r for r in self.results if r.status == FAILED]


class SyncEngine:
    """Translates changed files and mirrors everything else into the output tree.

    A file is retranslated only when the SHA-256 of its bytes differs from the
    hash recorded for its path at the last translation. Metadata is persisted
    after every translated file so finished work is never lost.
    """

    def __init__(self, file_processor: FileProcessor, translator, store: MetadataStore,
                 meta: TranslationMeta):
        self.file_processor = file_processor
        self.translator = translator
        self.store = store
        self.meta = meta

    def mirror_files(self, files: List[str], report: SyncReport) -> None:
        """Copy pass-through files verbatim, every run"""
        for file_path in files:
            rel_path = self.file_processor.relative_path(file_path)
            try:
                self.file_processor.copy_file(file_path)
                report.results.append(FileResult(rel_path, COPIED, translatable=False))
            except OSError as e:
                print(f"  ⚠️ Failed to copy {rel_path}: {e}")
                report.results.append(FileResult(rel_path, FAILED, str(e), translatable=False))

    def translate_files(self, files: List[str], report: SyncReport) -> None:
        """Translate every file whose content changed since its last translation"""
        total = len(files)
        for index, file_path in enumerate(files, 1):
            rel_path = self.file_processor.relative_path(file_path)
            try:
                status = self.sync_file(file_path, rel_path, index, total)
                report.results.append(FileResult(rel_path, status))
            except Exception as e:
                print(f"  ❌ [{index}/{total}] Failed to translate {rel_path}: {e}")
                report.results.append(FileResult(rel_path, FAILED, str(e)))

    def sync_file(self, file_path: str, rel_path: str, index: int = 1, total: int = 1) -> str:
        """Bring one translatable file up to date, returning its status"""
        file_hash = self.file_processor.hash_file(file_path)
        if self.meta.is_translated(rel_path, file_hash):
            return SKIPPED

        content = self.file_processor.read_file(file_path)
        output_path = self.file_processor.get_output_path(file_path)

        if not content:
            # Nothing to translate
            self.file_processor.write_file(output_path, content)
        else:
            start_time = time.time()
            print(f"  🤖 [{index}/{total}] Translating {rel_path}...")
            translated_content = self.translator.translate(content)
            self.file_processor.write_file(output_path, translated_content)
            print(f"  ✅ [{index}/{total}] {rel_path} done in {time.time() - start_time:.2f}s")

        self.meta.record(FileEntry(
            path=rel_path,
            hash=file_hash,
            translation_timestamp=int(time.time()),
        ))
        self.store.save(self.meta)
        return TRANSLATED
