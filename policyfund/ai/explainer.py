import hashlib
import json
import logging
from collections import OrderedDict
from typing import Dict, Any, Optional

import openai

from .. import config
from .prompt_builder import build_system_prompt, build_user_prompt

logger = logging.getLogger(__name__)

MAX_CACHE_ENTRIES = 256


class AIExplainer:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client=None):
        self.api_key = api_key or config.OPENAI_API_KEY
        self.client = client
        if self.client is None and self.api_key:
            self.client = openai.OpenAI(api_key=self.api_key)

        self.model = model or config.AI_MODEL
        self.max_tokens = 900
        self.temperature = 0.3

        # In-memory LRU cache: prompt hash -> response
        self.cache: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
        self.max_cache_entries = MAX_CACHE_ENTRIES

    def get_briefing(
        self,
        company_profile: Dict[str, Any],
        engine_output: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Generates a consultant briefing for the matching results.
        Identical prompts are answered from the cache.
        Returns None if API key is missing or an error occurs.
        """
        if not self.client:
            logger.warning("OpenAI API key not found. Skipping AI briefing.")
            return None

        system_prompt = build_system_prompt()
        user_prompt = build_user_prompt(company_profile, engine_output)
        key = _cache_key(self.model, system_prompt, user_prompt)

        if key in self.cache:
            self.cache.move_to_end(key)
            return self.cache[key]

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt}
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"}
            )

            content = response.choices[0].message.content
            if not content:
                return None

            parsed_content = json.loads(content)

        except (openai.OpenAIError, json.JSONDecodeError, IndexError) as e:
            logger.error("Error generating AI briefing: %s", e)
            return None

        self.cache[key] = parsed_content
        if len(self.cache) > self.max_cache_entries:
            self.cache.popitem(last=False)
        return parsed_content


def _cache_key(model: str, system_prompt: str, user_prompt: str) -> str:
    digest = hashlib.sha256()
    for part in (model, system_prompt, user_prompt):
        digest.update(part.encode("utf-8"))
        digest.update(b"\0")
    return digest.hexdigest()


# Singleton instance
explainer = AIExplainer()
