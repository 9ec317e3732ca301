#!/usr/bin/env python3

import hashlib
import os
import shutil
from pathlib import Path
from typing import List


VCS_DIR_NAME = '.git'


class FileProcessor:
    """Handles file operations between the source checkout and its translated mirror"""

    def __init__(self, source_root: str, output_root: str):
        self.source_root = os.path.normpath(source_root)
        self.output_root = os.path.normpath(output_root)

    def walk_tree(self) -> List[str]:
        """Collect every file under the source root, skipping .git directories.

        Uses an explicit stack instead of recursion so deep trees cannot hit
        the interpreter's recursion limit. Symlinked directories are followed
        unless they point back at one of their own ancestors; dangling links
        and other non-regular entries are skipped. Order of the result is not
        meaningful.
        """
        if not os.path.isdir(self.source_root):
            raise FileNotFoundError(f"Source directory not found: {self.source_root}")

        files = []
        stack = [(self.source_root, frozenset([os.path.realpath(self.source_root)]))]
        while stack:
            directory, ancestors = stack.pop()
            with os.scandir(directory) as entries:
                for entry in entries:
                    if entry.is_dir():
                        if entry.name == VCS_DIR_NAME:
                            continue
                        real_path = os.path.realpath(entry.path)
                        if real_path in ancestors:
                            print(f"  ⚠️ Skipping symlink loop: {entry.path}")
                            continue
                        stack.append((entry.path, ancestors | {real_path}))
                    elif entry.is_file():
                        files.append(entry.path)
                    else:
                        print(f"  ⚠️ Skipping {entry.path}: not a regular file")
        return files

    def relative_path(self, file_path: str) -> str:
        """Path relative to the source root, always with '/' separators"""
        return Path(os.path.relpath(file_path, self.source_root)).as_posix()

    def get_output_path(self, file_path: str) -> str:
        """Map a source file onto the same relative location in the output tree"""
        return os.path.join(self.output_root, os.path.relpath(file_path, self.source_root))

    @staticmethod
    def hash_file(file_path: str) -> str:
        """Hex SHA-256 of the file bytes"""
        return hashlib.sha256(Path(file_path).read_bytes()).hexdigest()

    @staticmethod
    def read_file(file_path: str) -> str:
        """Read file content as UTF-8 text"""
        return Path(file_path).read_text(encoding='utf-8')

    @staticmethod
    def write_file(file_path: str, content: str) -> None:
        """Write content to file, creating parent directories"""
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')

    def copy_file(self, file_path: str) -> str:
        """Copy a source file byte-for-byte into the output tree"""
        output_path = Path(self.get_output_path(file_path))
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(Path(file_path).read_bytes())
        return str(output_path)

    @staticmethod
    def copy_tree(source_dir: str, target_dir: str) -> None:
        """Copy a whole directory over another one, overwriting existing files"""
        shutil.copytree(source_dir, target_dir, dirs_exist_ok=True)
