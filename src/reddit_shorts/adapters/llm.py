"""
Unified LLM client with fallback support
Priority: Gemini → OpenRouter → Ollama
All API keys come from reddit_shorts.config (environment / .env).
"""

from typing import Any, Dict, List, Optional

import ollama
import requests

from reddit_shorts import config


class LLMError(Exception):
    """Every configured provider failed."""


class LLMClient:
    """Unified LLM client with fallback support"""

    PROVIDERS = ("gemini", "openrouter", "ollama")

    def __init__(
        self,
        gemini_api_key: Optional[str] = None,
        openrouter_api_key: Optional[str] = None,
        ollama_base_url: Optional[str] = None,
    ):
        self.gemini_config = {
            "model": config.GEMINI_MODEL,
            "temperature": 1.0,
            "api_key": gemini_api_key if gemini_api_key is not None else config.GEMINI_API_KEY,
            "base_url": "https://generativelanguage.googleapis.com/v1beta/models",
        }
        self.openrouter_config = {
            "model": config.OPENROUTER_MODEL,
            "temperature": 1.0,
            "api_key": openrouter_api_key if openrouter_api_key is not None else config.OPENROUTER_API_KEY,
            "base_url": "https://openrouter.ai/api/v1",
        }
        self.ollama_config = {
            "base_url": ollama_base_url or config.OLLAMA_BASE_URL,
            "model": config.OLLAMA_MODEL,
        }
        self.current_provider: Optional[str] = None

    def _provider_order(self) -> List[str]:
        """Current provider first, then the rest in priority order."""
        order = [p for p in self.PROVIDERS if self._is_configured(p)]
        if self.current_provider in order:
            order.remove(self.current_provider)
            order.insert(0, self.current_provider)
        return order

    def _is_configured(self, provider: str) -> bool:
        if provider == "gemini":
            return bool((self.gemini_config.get("api_key") or "").strip())
        if provider == "openrouter":
            return bool((self.openrouter_config.get("api_key") or "").strip())
        return True  # Ollama is local, always worth a try

    def generate(self, prompt: str, options: Optional[Dict] = None) -> Dict[str, Any]:
        """
        Generate response using current provider, with fallback
        Returns: {"response": str, "provider": str}
        """
        if options is None:
            options = {}

        for provider in self._provider_order():
            generate = getattr(self, f"_generate_{provider}")
            result = generate(prompt, options)
            if result and (result.get("response") or "").strip():
                if provider != self.current_provider:
                    print(f"  ✅ Using {provider} for text generation")
                self.current_provider = provider
                return result

        raise LLMError("All LLM providers failed")

    def _generate_gemini(self, prompt: str, options: Dict) -> Optional[Dict]:
        """Generate using Gemini REST API"""
        try:
            url = f"{self.gemini_config['base_url']}/{self.gemini_config['model']}:generateContent"
            data = {
                "contents": [{"role": "user", "parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": options.get("temperature", self.gemini_config["temperature"]),
                    "maxOutputTokens": options.get("num_predict", 2048),
                },
            }
            headers = {
                "x-goog-api-key": self.gemini_config["api_key"],
                "Content-Type": "application/json",
            }
            response = requests.post(url, headers=headers, json=data, timeout=60)
            if response.status_code != 200:
                print(f"  ⚠️  Gemini API returned status {response.status_code}: {response.text[:200]}")
                return None

            candidate = response.json().get("candidates", [{}])[0]
            parts = candidate.get("content", {}).get("parts", [])
            text = parts[0].get("text", "") if parts else ""
            if candidate.get("finishReason") == "SAFETY":
                print("  ⚠️  Gemini response blocked by safety filters")
            return {"response": text, "provider": "gemini"}
        except Exception as e:
            print(f"  ⚠️  Gemini REST API error: {e}")
            return None

    def _generate_openrouter(self, prompt: str, options: Dict) -> Optional[Dict]:
        """Generate using OpenRouter"""
        try:
            url = f"{self.openrouter_config['base_url']}/chat/completions"
            headers = {
                "Authorization": f"Bearer {self.openrouter_config['api_key']}",
                "Content-Type": "application/json",
            }
            data = {
                "model": self.openrouter_config["model"],
                "messages": [{"role": "user", "content": prompt}],
                "temperature": options.get("temperature", self.openrouter_config["temperature"]),
                "max_tokens": min(options.get("num_predict", 2048), 4096),
            }
            response = requests.post(url, headers=headers, json=data, timeout=60)
            if response.status_code == 200:
                result = response.json()
                text = result.get("choices", [{}])[0].get("message", {}).get("content", "")
                return {"response": text, "provider": "openrouter"}
            print(f"  ⚠️  OpenRouter returned status {response.status_code}")
            return None
        except Exception as e:
            print(f"  ⚠️  OpenRouter error: {e}")
            return None

    def _generate_ollama(self, prompt: str, options: Dict) -> Optional[Dict]:
        """Generate using Ollama"""
        try:
            client = ollama.Client(host=self.ollama_config["base_url"])
            response = client.generate(
                model=self.ollama_config["model"],
                prompt=prompt,
                options={
                    "temperature": options.get("temperature", 0.7),
                    "num_predict": options.get("num_predict", 2048),
                },
            )
            return {"response": response.get("response", ""), "provider": "ollama"}
        except Exception as e:
            print(f"  ⚠️  Ollama error: {e}")
            return None
