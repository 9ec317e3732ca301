#!/usr/bin/env python3

import posixpath
from typing import Iterable, List, Tuple


def parse_target_suffix(target: str) -> List[str]:
    """Parse the target filter string into a list of suffixes.

    "*.md *.txt" becomes ["md", "txt"].
    """
    stripped = target.replace('*', '').replace('.', '')
    return [s for s in stripped.split() if s]


def file_extension(path: str) -> str:
    """Text after the final '.' of the final path component, '' if none"""
    name = posixpath.basename(path.replace('\\', '/'))
    return posixpath.splitext(name)[1][1:]


class FileFilter:
    """Decides which repository files are translated and which are copied as-is.

    Paths handed to the filter are relative to the source checkout root, so
    exclude rules never see the workspace location.
    """

    def __init__(self, filter_config):
        self.config = filter_config
        self.suffixes = parse_target_suffix(filter_config.target)
        self.match_mode = filter_config.match

    def is_candidate(self, path: str) -> bool:
        """Check the path against the target suffixes"""
        if self.match_mode == 'suffix':
            # Raw string-suffix test: "notes.xmd" matches "md"
            return any(path.endswith(s) for s in self.suffixes)
        return file_extension(path) in self.suffixes

    def is_included(self, path: str) -> bool:
        if not self.config.include:
            return True
        return any(s in path for s in self.config.include)

    def is_excluded(self, path: str) -> bool:
        return any(s in path for s in self.config.exclude)

    def should_translate(self, path: str) -> bool:
        return self.is_candidate(path) and self.is_included(path) and not self.is_excluded(path)

    def classify(self, paths: Iterable[str]) -> Tuple[List[str], List[str]]:
        """Split paths into (translatable, passthrough)"""
        translatable, passthrough = [], []
        for path in paths:
            if self.should_translate(path):
                translatable.append(path)
            else:
                passthrough.append(path)
        return translatable, passthrough
