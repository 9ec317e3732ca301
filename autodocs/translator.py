#!/usr/bin/env python3

from typing import Dict, List, Optional

import requests
from openai import OpenAI


DEFAULT_PROMPT = "translate the content to {target_lang}: please just reply with the translated content"


class TranslationError(Exception):
    """Raised when the translation backend fails or returns nothing"""


class Translator:
    """Handles AI translation services using the OpenAI API"""

    def __init__(self, engine):
        self.engine = engine
        self.client = OpenAI(
            api_key=engine.api_key,
            base_url=engine.url if engine.url else None
        )

        # Statistics
        self.input_tokens = 0
        self.output_tokens = 0
        self.api_calls = 0

    def build_messages(self, text: str) -> List[Dict[str, str]]:
        instruction = self.engine.prompt or DEFAULT_PROMPT.format(target_lang=self.engine.target_lang)
        messages = []
        if self.engine.system_prompt:
            messages.append({"role": "system", "content": self.engine.system_prompt})
        messages.append({"role": "user", "content": f"{instruction}\n{text}"})
        return messages

    def call_api(self, messages: List[Dict[str, str]]) -> str:
        """Call the chat completion API"""
        try:
            response = self.client.chat.completions.create(
                model=self.engine.model,
                messages=messages,
                temperature=self.engine.temperature,
                top_p=self.engine.top_p,
                n=1,
            )
        except Exception as e:
            raise TranslationError(f"Error calling OpenAI API: {e}") from e

        # Track usage
        if hasattr(response, 'usage') and response.usage:
            self.input_tokens += response.usage.prompt_tokens or 0
            self.output_tokens += response.usage.completion_tokens or 0

        self.api_calls += 1
        if not response.choices or not response.choices[0].message.content:
            raise TranslationError("OpenAI API returned an empty reply")
        return response.choices[0].message.content

    def translate(self, text: str) -> str:
        """Translate text, raising TranslationError on failure"""
        return self.call_api(self.build_messages(text))

    def get_statistics(self) -> Dict[str, int]:
        """Get token usage statistics"""
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "api_calls": self.api_calls
        }


class HttpTranslator(Translator):
    """Talks to any OpenAI-compatible /chat/completions endpoint over plain HTTP"""

    def __init__(self, engine, timeout: Optional[float] = None):
        self.engine = engine
        self.timeout = timeout
        self.session = requests.Session()

        self.input_tokens = 0
        self.output_tokens = 0
        self.api_calls = 0

    def call_api(self, messages: List[Dict[str, str]]) -> str:
        url = f"{self.engine.url.rstrip('/')}/chat/completions"
        headers = {'Authorization': f'Bearer {self.engine.api_key}'}
        payload = {
            'model': self.engine.model,
            'messages': messages,
            'temperature': self.engine.temperature,
            'top_p': self.engine.top_p,
            'n': 1,
            'stream': False,
        }

        try:
            response = self.session.post(url, headers=headers, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise TranslationError(f"Error calling {url}: {e}") from e

        if response.status_code != 200:
            raise TranslationError(
                f"Translation API returned status {response.status_code}: {response.text[:200]}"
            )

        self.api_calls += 1
        try:
            result = response.json()
            usage = result.get('usage') or {}
            self.input_tokens += usage.get('prompt_tokens') or 0
            self.output_tokens += usage.get('completion_tokens') or 0
            content = result['choices'][0]['message']['content']
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise TranslationError(f"Unexpected response from {url}: {e}") from e

        if not content:
            raise TranslationError(f"Translation API at {url} returned an empty reply")
        return content


def create_translator(engine) -> Translator:
    """Pick the backend implementation named in the engine config"""
    if engine.name == 'http':
        return HttpTranslator(engine)
    return Translator(engine)
