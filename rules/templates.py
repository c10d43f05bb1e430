"""
Template Manager - Markdown response templates
==============================================

This module holds the agent's reply templates and renders them with
``{variable}`` substitution. Rendering is deterministic: there are no
random choices and no date or time variables, so the same inputs always
produce the same reply.
"""

import re
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
from dataclasses import dataclass

import yaml

from core.exceptions import ConfigError

PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")


CAPABILITY_MENU = """🔍 **Web Search** - Find information online
🧮 **Calculator** - Perform complex calculations
💻 **Code Executor** - Run and analyze code
📚 **Knowledge Base** - Access comprehensive knowledge
🖼️ **Image Analyzer** - Analyze visual content
📊 **Data Processor** - Process and analyze data"""


DEFAULT_TEMPLATES: Dict[str, str] = {
    "calculation": (
        "I've calculated that: **{calculation_result}**\n\n"
        "Is there anything else you'd like me to compute?"
    ),
    "search": (
        "I've searched for information about your query:\n\n"
        "{search_result}\n\n"
        "**Key Points:**\n"
        "- This is a demonstration of the web search capability\n"
        "- In production, this would query real search APIs\n"
        "- Results would be synthesized from multiple sources\n\n"
        "Would you like me to search for something else?"
    ),
    "code": (
        "I can help with coding tasks! I have access to:\n\n"
        "**Code Execution:** Run and test code safely\n"
        "**Code Analysis:** Review and optimize code\n"
        "**Code Generation:** Write functions and scripts\n\n"
        "Here's an example:\n\n"
        "```python\n"
        "def fibonacci(n):\n"
        "    if n <= 1:\n"
        "        return n\n"
        "    return fibonacci(n-1) + fibonacci(n-2)\n"
        "\n"
        "print([fibonacci(i) for i in range(10)])\n"
        "```\n\n"
        "What would you like me to code for you?"
    ),
    "knowledge": (
        "I can explain that! I'm equipped with:\n\n"
        "**Knowledge Base:** Access to comprehensive information\n"
        "**Real-time Learning:** Updated with current information\n"
        "**Multi-domain Expertise:** Science, technology, arts, and more\n\n"
        "Based on your question, here's what I understand:\n\n"
        "{query}\n\n"
        "I've analyzed this using my knowledge base. In a production system, "
        "this would query vector databases and retrieve the most relevant information.\n\n"
        "What else would you like to know?"
    ),
    "data": (
        "I can help process and analyze data! My capabilities include:\n\n"
        "**Data Processing:**\n"
        "- CSV/JSON parsing\n"
        "- Statistical analysis\n"
        "- Data transformation\n"
        "- Visualization insights\n\n"
        "**Example Analysis:**\n"
        "```json\n"
        "{\n"
        '  "processed": true,\n'
        '  "records": 1000,\n'
        '  "insights": [\n'
        '    "Average value: 42.5",\n'
        '    "Trend: Increasing",\n'
        '    "Anomalies detected: 3"\n'
        "  ]\n"
        "}\n"
        "```\n\n"
        "What data would you like me to process?"
    ),
    "tools_summary": (
        "I've processed your request using: **{tool_names}**\n\n"
        "{tool_results}\n\n"
        "I have multiple capabilities including:\n\n"
        + CAPABILITY_MENU +
        "\n\nHow else can I assist you?"
    ),
    "greeting": (
        "Hello! I'm your {agent_name} with advanced capabilities:\n\n"
        "✨ **Autonomous Tool Selection** - I choose the right tools automatically\n"
        "🎯 **Multi-Domain Expertise** - From code to calculations to research\n"
        "⚡ **Real-Time Processing** - Fast and efficient responses\n"
        "🧠 **Intelligent Reasoning** - Understanding context and intent\n\n"
        "Try asking me to:\n"
        "- Search for information\n"
        "- Calculate complex equations\n"
        "- Write or analyze code\n"
        "- Process data\n"
        "- Explain concepts\n\n"
        "What would you like to explore?"
    ),
    "default": (
        "I'm your {agent_name}! I've analyzed your request: \"{query}\"\n\n"
        "**My Capabilities:**\n\n"
        "🔍 **Search** - \"search for quantum computing\"\n"
        "🧮 **Calculate** - \"calculate 156 * 789 + 432\"\n"
        "💻 **Code** - \"write a sorting algorithm\"\n"
        "📚 **Knowledge** - \"explain machine learning\"\n"
        "🖼️ **Images** - \"analyze this image\"\n"
        "📊 **Data** - \"process this dataset\"\n\n"
        "I'm ready to help with any of these tasks. What would you like me to do?"
    ),
}


@dataclass
class Template:
    """
    A response template with variable substitution support.

    Placeholders look like ``{variable}``. Unknown placeholders are left
    untouched, and substituted values are never scanned again, so text
    copied from the user cannot inject further placeholders.

    Attributes:
        content (str): Template content with placeholders
        name (str): Optional template name
    """
    content: str
    name: str = ""

    def render(self, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Render the template with context variables.

        Args:
            context: Dictionary of variable values

        Returns:
            Rendered string
        """
        context = context or {}

        def replace(match):
            var_name = match.group(1)
            if var_name in context:
                return str(context[var_name])
            return match.group(0)

        return PLACEHOLDER_PATTERN.sub(replace, self.content)

    def extract_variables(self) -> List[str]:
        """Return the placeholder names used by this template, in order of first use."""
        seen: List[str] = []
        for match in PLACEHOLDER_PATTERN.finditer(self.content):
            if match.group(1) not in seen:
                seen.append(match.group(1))
        return seen


class TemplateManager:
    """
    Manager for named templates.

    Starts with the built-in reply templates; any of them can be
    replaced from a dictionary or a YAML file.

    Example:
        manager = TemplateManager()
        reply = manager.render("default", {"query": "hi", "agent_name": "Elite AI Agent"})
    """

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        self.templates: Dict[str, Template] = {}
        self.load_from_dict(DEFAULT_TEMPLATES if templates is None else templates)

    def add_template(self, name: str, content: str) -> None:
        """Add or replace a named template."""
        self.templates[name] = Template(content=content, name=name)

    def get_template(self, name: str) -> Optional[Template]:
        return self.templates.get(name)

    def render(self, name: str, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Render a template by name.

        Raises:
            KeyError: If no template has that name
        """
        template = self.get_template(name)
        if template is None:
            raise KeyError(f"Unknown template: {name}")
        return template.render(context)

    def has_template(self, name: str) -> bool:
        return name in self.templates

    def list_templates(self) -> List[str]:
        return list(self.templates.keys())

    def load_from_dict(self, data: Dict[str, str]) -> None:
        """
        Load templates from dictionary.

        Args:
            data: Dictionary mapping names to content
        """
        for name, content in data.items():
            self.add_template(name, content)

    def load_from_yaml(self, path: Union[str, Path]) -> None:
        """
        Override templates from a YAML mapping of name -> markdown.

        Raises:
            ConfigError: If the file cannot be read or has the wrong shape
        """
        path = Path(path).expanduser()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse templates file: {e}", {"path": str(path)})
        except IOError as e:
            raise ConfigError(f"Failed to read templates file: {e}", {"path": str(path)})

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise ConfigError("Templates file must map names to text", {"path": str(path)})

        self.load_from_dict(data)

    def to_dict(self) -> Dict[str, str]:
        """Export templates to dictionary."""
        return {name: t.content for name, t in self.templates.items()}
