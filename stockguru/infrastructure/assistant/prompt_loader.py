"""
Prompt loader for the assistant adapters.

Loads system prompts and user templates from YAML configuration.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = "You are StockGuru, an Indian stock market assistant."


class PromptLoader:
    """Load and render prompts from YAML."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize prompt loader.

        Args:
            config_path: Path to a prompts YAML file. Defaults to the
                prompts.yaml shipped next to this module.
        """
        if config_path is None:
            config_path = Path(__file__).parent / "prompts.yaml"

        self.config_path = config_path
        self.prompts = self._load_prompts()

    def _load_prompts(self) -> dict[str, Any]:
        """Load prompts from YAML file."""
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                prompts = yaml.safe_load(f) or {}
            logger.info("Loaded prompts from %s", self.config_path)
            return prompts
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load prompts from %s: %s", self.config_path, e)
            return {}

    def system_prompt(self, name: str) -> str:
        """Return the system prompt of a prompt group."""
        return self.prompts.get(name, {}).get("system", DEFAULT_SYSTEM_PROMPT).strip()

    def role_prompt(self, name: str, role: str) -> str:
        """Return a role-specific system prompt, e.g. per query type."""
        roles = self.prompts.get(name, {}).get("roles", {})
        return roles.get(role, DEFAULT_SYSTEM_PROMPT).strip()

    def render(self, name: str, **values: Any) -> str:
        """
        Render the user template of a prompt group.

        Args:
            name: Prompt group, e.g. 'insight' or 'classifier'.
            **values: Template placeholders.

        Returns:
            Formatted user prompt. Without a template, the values are
            listed one per line.
        """
        template = self.prompts.get(name, {}).get("user_template", "")
        if not template:
            return "\n".join(f"{key}: {value}" for key, value in values.items())
        return template.format(**values)


# Global prompt loader instance
_prompt_loader = None


def get_prompt_loader() -> PromptLoader:
    """Get global prompt loader instance."""
    global _prompt_loader
    if _prompt_loader is None:
        _prompt_loader = PromptLoader()
    return _prompt_loader
