#!/usr/bin/env python3

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or is invalid"""


@dataclass
class FilterConfig:
    """Which files of the repository get translated"""

    target: str = ''
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    match: str = 'suffix'

    def __post_init__(self):
        self.target = (self.target or '').strip()
        self.include = [s for s in (self.include or []) if s]
        self.exclude = [s for s in (self.exclude or []) if s]
        self.match = (self.match or 'suffix').strip().lower()
        if self.match not in ('extension', 'suffix'):
            raise ConfigError(f"filter.match must be 'extension' or 'suffix', got '{self.match}'")


@dataclass
class EngineConfig:
    """Translation backend connection details"""

    name: str = 'openai'
    url: str = field(default_factory=lambda: os.getenv('BASE_URL', 'https://api.openai.com/v1').strip())
    model: str = field(default_factory=lambda: os.getenv('AI_MODEL', 'gpt-4o-mini').strip())
    api_key_file: str = ''
    api_key: str = field(default='', repr=False)
    temperature: float = field(default_factory=lambda: float(os.getenv('TEMPERATURE', '0.7').strip()))
    top_p: float = 0.7
    target_lang: str = field(default_factory=lambda: os.getenv('TARGET_LANG', 'English').strip())
    prompt: str = ''
    system_prompt: str = ''

    def __post_init__(self):
        self.name = (self.name or 'openai').strip().lower()
        if self.name not in ('openai', 'http'):
            raise ConfigError(f"engine.name must be 'openai' or 'http', got '{self.name}'")
        self.url = self.url.strip()
        self.model = self.model.strip()
        self.prompt = EngineConfig._read_prompt(self.prompt)
        self.system_prompt = EngineConfig._read_prompt(self.system_prompt)
        if not self.api_key:
            self.api_key = EngineConfig._read_api_key(self.api_key_file)

    @staticmethod
    def _read_api_key(api_key_file: str) -> str:
        if not api_key_file:
            return os.getenv('API_KEY', '').strip()
        try:
            return Path(api_key_file).expanduser().read_text(encoding='utf-8').strip()
        except OSError as e:
            raise ConfigError(f"Could not read API key file {api_key_file}: {e}") from e

    @staticmethod
    def _read_prompt(prompt_text: str) -> str:
        prompt_text = (prompt_text or '').strip()
        if prompt_text and '\n' not in prompt_text and Path(prompt_text).is_file():
            try:
                return Path(prompt_text).read_text(encoding='utf-8')
            except Exception as e:
                print(f"Warning: Could not read prompt from file {prompt_text}: {e}")
        return prompt_text


@dataclass
class PublishConfig:
    """Where the translated tree is committed after a run"""

    path: str
    message: str = 'Auto-translation update'
    push: bool = True


@dataclass
class Config:
    """Configuration management for the repository translation workflow"""

    repo: str
    branch: str = 'main'
    engine: EngineConfig = field(default_factory=EngineConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    publish: Optional[PublishConfig] = None
    workspace: str = field(default_factory=lambda: os.getenv('WORKSPACE', './workspace').strip())

    def __post_init__(self):
        self.repo = (self.repo or '').strip()
        self.branch = (self.branch or 'main').strip()
        if not self.repo:
            raise ConfigError('repo is required')
        if not self.filter.target:
            raise ConfigError('filter.target is required')

    @classmethod
    def from_file(cls, config_path: str) -> 'Config':
        """Load configuration from a YAML file"""
        try:
            text = Path(config_path).read_text(encoding='utf-8')
        except OSError as e:
            raise ConfigError(f"Error reading the config file @ {config_path}: {e}") from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing the config file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        try:
            engine = EngineConfig(**(data.get('engine') or {}))
            file_filter = FilterConfig(**(data.get('filter') or {}))
            publish = PublishConfig(**data['publish']) if data.get('publish') else None
            kwargs = {
                'repo': data.get('repo', ''),
                'branch': data.get('branch', 'main'),
                'engine': engine,
                'filter': file_filter,
                'publish': publish,
            }
            if data.get('workspace'):
                kwargs['workspace'] = str(data['workspace']).strip()
            return cls(**kwargs)
        except TypeError as e:
            # Unknown or missing keys in one of the sections
            raise ConfigError(f"Invalid config: {e}") from e

    def print_config(self) -> None:
        """Print current configuration"""
        api_key = self.engine.api_key
        print("\n=== Configuration ===")
        print(f"Repository: {self.repo}")
        print(f"Branch: {self.branch}")
        print(f"Workspace: {self.workspace}")
        print(f"Engine: {self.engine.name} ({self.engine.url})")
        print(f"AI Model: {self.engine.model}")
        print(f"API Key: {'*' * 8}{api_key[-4:] if len(api_key) > 4 else ''}")
        print(f"Target Language: {self.engine.target_lang}")
        print(f"Temperature: {self.engine.temperature}")
        print(f"Filter Target: {self.filter.target} (match: {self.filter.match})")
        print(f"Filter Include: {self.filter.include}")
        print(f"Filter Exclude: {self.filter.exclude}")

        if self.publish:
            print(f"Publish Path: {self.publish.path}")
            print(f"Publish Push: {self.publish.push}")

        print("====================\n")
